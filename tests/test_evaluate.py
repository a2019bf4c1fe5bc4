import shutil
from pathlib import Path

import pandas as pd
import pytest
import yaml

from landlord_sim.evaluate import main

EXAMPLES = Path(__file__).resolve().parents[1] / "examples"


@pytest.fixture
def trace_file(tmp_path):
    dst = tmp_path / "abc.toml"
    shutil.copy(EXAMPLES / "abc.toml", dst)
    return dst


def test_cli_writes_report(trace_file, tmp_path, capsys):
    out = tmp_path / "report.yaml"
    csv = tmp_path / "steps.csv"
    rc = main(["-i", str(trace_file), "-o", str(out), "-s", "2", "-d", "1",
               "-p", "FIFO", "fifo", "--steps-csv", str(csv)])
    assert rc == 0

    report = yaml.safe_load(out.read_text())
    assert report["config"] == {"capacity": 2, "refresh": "FIFO", "tiebreak": "FIFO"}
    assert report["summary"]["hits"] == 0
    assert [s["outcome"] for s in report["steps"]] == ["MISS"] * 4
    assert [s["evicted"] for s in report["steps"]] == [[], [], ["A"], ["B"]]
    assert len(report["suffixes"]) == 4
    assert report["suffixes"][0]["outcomes"] == ["MISS"] * 4
    assert report["division"]["start"] == 1
    assert report["division"]["competitive_ratio"] == 1.0

    steps = pd.read_csv(csv)
    assert steps["key"].tolist() == ["A", "B", "C", "A"]
    assert "Suffix results" in capsys.readouterr().out


def test_cli_reads_config_file(trace_file, tmp_path):
    out = tmp_path / "report.yaml"
    rc = main(["-i", str(trace_file), "-o", str(out),
               "-c", str(EXAMPLES / "config.yaml")])
    assert rc == 0
    assert yaml.safe_load(out.read_text())["config"]["tiebreak"] == "FIFO"


def test_cli_keeps_existing_report(trace_file, tmp_path):
    out = tmp_path / "report.yaml"
    out.write_text("keep me")
    assert main(["-i", str(trace_file), "-o", str(out), "-s", "2"]) == 1
    assert out.read_text() == "keep me"


@pytest.mark.parametrize("extra", [
    ["-s", "2", "-p", "LRU", "RAND"],
    ["-s", "2", "-p", "HALF", "LRU"],
    ["-s", "0"],
    ["-s", "inf"],
    ["-s", "1e400"],
    ["-s", "2", "-c", "missing.yaml"],
    ["-s", "2", "-d", "4"],
    ["-p", "LRU", "LRU"],
])
def test_cli_rejects_bad_configuration(trace_file, tmp_path, extra):
    out = tmp_path / "report.yaml"
    assert main(["-i", str(trace_file), "-o", str(out)] + extra) == 2
    assert not out.exists()


def test_cli_rejects_item_larger_than_cache(tmp_path):
    src = tmp_path / "big.toml"
    src.write_text('trace = ["x"]\n[[items]]\nlabel = "x"\ncost = 1\nsize = 9\n')
    assert main(["-i", str(src), "-o", str(tmp_path / "r.yaml"), "-s", "4"]) == 2


@pytest.mark.parametrize("name, text", [
    ("inf.toml", 'trace = ["x"]\n[[items]]\nlabel = "x"\ncost = inf\nsize = 1\n'),
    ("broken.yaml", "items: [{label: x\n"),
])
def test_cli_rejects_unusable_input(tmp_path, name, text):
    src = tmp_path / name
    src.write_text(text)
    out = tmp_path / "r.yaml"
    assert main(["-i", str(src), "-o", str(out), "-s", "4"]) == 2
    assert not out.exists()


def test_cli_missing_input(tmp_path):
    assert main(["-i", str(tmp_path / "none.toml"), "-o", str(tmp_path / "r.yaml"), "-s", "2"]) == 2
