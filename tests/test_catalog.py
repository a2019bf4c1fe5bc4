import pytest

from landlord_sim.catalog import Catalog, Item
from landlord_sim.errors import CatalogValidationError, TraceValidationError
from landlord_sim.ingest import load_trace_info


def test_from_records_keeps_order():
    catalog = Catalog.from_records([
        {"label": "b", "cost": 2, "size": 1},
        {"label": "a", "cost": 1.5, "size": 3},
    ])
    assert list(catalog) == ["b", "a"]
    assert catalog["a"] == Item("a", 1.5, 3)


@pytest.mark.parametrize("record", [
    {"label": "a", "size": 1},
    {"label": "a", "cost": 1},
    {"label": "a", "cost": 0, "size": 1},
    {"label": "a", "cost": 1, "size": -2},
    {"label": "a", "cost": "1", "size": 1},
    {"label": "a", "cost": True, "size": 1},
    {"label": "a", "cost": float("inf"), "size": 1},
    {"label": "a", "cost": 1, "size": float("inf")},
    {"label": "a", "cost": float("nan"), "size": 1},
    {"cost": 1, "size": 1},
])
def test_bad_records(record):
    with pytest.raises(CatalogValidationError):
        Catalog.from_records([record])


def test_duplicate_label():
    with pytest.raises(CatalogValidationError, match="Duplicate"):
        Catalog([Item("a", 1, 1), Item("a", 2, 2)])


def test_check_fits():
    catalog = Catalog([Item("a", 1, 3), Item("b", 1, 5)])
    catalog.check_fits(5)
    with pytest.raises(CatalogValidationError, match="exceeding cache size"):
        catalog.check_fits(4)


def test_resolve_reports_unknown_label():
    catalog = Catalog([Item("a", 1, 1)])
    assert catalog.resolve(["a", "a"]) == [catalog["a"]] * 2
    with pytest.raises(TraceValidationError, match="#1"):
        catalog.resolve(["a", "q"])


def test_load_toml(tmp_path):
    path = tmp_path / "trace.toml"
    path.write_text(
        'trace = ["x", "y", "x"]\n'
        '[[items]]\nlabel = "x"\ncost = 4\nsize = 2\n'
        '[[items]]\nlabel = "y"\ncost = 1\nsize = 1\n'
    )
    catalog, trace = load_trace_info(path)
    assert trace == ["x", "y", "x"]
    assert catalog["x"].cost == 4


def test_load_yaml(tmp_path):
    path = tmp_path / "trace.yaml"
    path.write_text(
        "items:\n  - {label: x, cost: 4, size: 2}\n"
        "trace: [x, x]\n"
    )
    catalog, trace = load_trace_info(path)
    assert list(catalog) == ["x"] and trace == ["x", "x"]


def test_load_rejects_unknown_request(tmp_path):
    path = tmp_path / "trace.toml"
    path.write_text('trace = ["x", "z"]\n[[items]]\nlabel = "x"\ncost = 1\nsize = 1\n')
    with pytest.raises(TraceValidationError):
        load_trace_info(path)


@pytest.mark.parametrize("text", ['trace = ["x"]\n', "items = [\n"])
def test_load_rejects_bad_file(tmp_path, text):
    path = tmp_path / "trace.toml"
    path.write_text(text)
    with pytest.raises(CatalogValidationError):
        load_trace_info(path)


@pytest.mark.parametrize("field", ["cost", "size"])
def test_load_rejects_infinite_toml_values(tmp_path, field):
    other = "size" if field == "cost" else "cost"
    path = tmp_path / "trace.toml"
    path.write_text(f'trace = ["x"]\n[[items]]\nlabel = "x"\n{field} = inf\n{other} = 1\n')
    with pytest.raises(CatalogValidationError, match="infinite"):
        load_trace_info(path)


@pytest.mark.parametrize("name, text", [
    ("trace.yaml", "items: [{label: x, cost: 1\n"),
    ("trace.yml", "- just\n- a list\n"),
])
def test_load_rejects_bad_yaml(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    with pytest.raises(CatalogValidationError):
        load_trace_info(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(CatalogValidationError, match="Could not read"):
        load_trace_info(tmp_path / "missing.toml")
