"""
Command line entry point: replay a trace through a Landlord cache, analyse
every suffix, and write the results as a YAML report.

    landlord-sim -i trace.toml -o report.yaml -s 4 -d 2 -p LRU FIFO
"""

import argparse
import logging
import os
import sys

import pandas as pd

from .config import load_config
from .errors import CatalogValidationError, ConfigurationError, TraceValidationError
from .ingest import load_trace_info
from .report import build_report, write_report
from .simulator import replay
from .suffix import analyze_suffixes, suffix_frame

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="landlord-sim",
        description="A simple cache simulator for the Landlord cache replacement policy")
    parser.add_argument("-i", "--in-path", required=True, metavar="INPUT FILE",
                        help="TOML (or YAML) file with `items` and `trace`")
    parser.add_argument("-o", "--out-path", required=True, metavar="OUTPUT FILE",
                        help="YAML report to create")
    parser.add_argument("-s", "--size", metavar="CACHE SIZE",
                        help="capacity of the simulated caches")
    parser.add_argument("-d", "--div", type=int, metavar="PREFIX/SUFFIX DIVISION",
                        help="trace position reported as the detailed suffix split")
    parser.add_argument("-p", "--policies", nargs=2, metavar=("HIT", "TIEBREAK"),
                        help="hit policy {0,1,FIFO,LRU} and tiebreaking policy {LRU,FIFO}")
    parser.add_argument("-c", "--config", help="YAML file with default settings")
    parser.add_argument("-w", "--workers", type=int, help="processes for suffix analysis")
    parser.add_argument("--steps-csv", help="also write the per-step table as CSV")
    parser.add_argument("--progress", action="store_true", help="show a progress bar")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    overrides = {
        "capacity": args.size,
        "division": args.div,
        "workers": args.workers,
        "progress": args.progress or None,
    }
    if args.policies:
        overrides["refresh"], overrides["tiebreak"] = args.policies

    try:
        config, opts = load_config(args.config, overrides)
        catalog, trace = load_trace_info(args.in_path)
        catalog.check_fits(config.capacity)
        if opts.division is not None and opts.division >= len(trace):
            raise ConfigurationError(
                f"Division {opts.division} is outside the trace of length {len(trace)}")
    except (CatalogValidationError, TraceValidationError, ConfigurationError) as e:
        logger.error("%s", e)
        return 2

    if os.path.exists(args.out_path):
        logger.error("Output file path %s already taken.", args.out_path)
        return 1

    full = replay(catalog, trace, config)
    suffixes = analyze_suffixes(catalog, trace, config,
                                workers=opts.workers, progress=opts.progress)
    report = build_report(config, full, suffixes, opts.division)
    try:
        write_report(report, args.out_path)
    except FileExistsError:
        logger.error("Output file path %s already taken.", args.out_path)
        return 1
    if args.steps_csv:
        full.to_frame().to_csv(args.steps_csv, index=False)

    summary = pd.DataFrame([report["summary"]])
    print(summary.to_string(index=False))
    print("\nSuffix results:")
    print(suffix_frame(full, suffixes).to_string(index=False))
    if "division" in report:
        print(f"\nSuffix competitive ratio at {opts.division}: "
              f"{report['division']['competitive_ratio']:.3f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
