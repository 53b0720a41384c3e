#!/usr/bin/env python3
"""Print grouped statistics for previously exported result CSV files.

Example:
    python scripts/summarize_results.py results/resultados_busca_monotona.csv \
        results/resultados_tempera_simulada.csv --summary results/summary.csv
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pcmax.experiments.aggregate import (  # noqa: E402
    format_annealing_report,
    format_local_search_report,
    read_results_csv,
    split_records,
    write_summary_csv,
)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Summarize exported result CSV files")
    parser.add_argument("csv", nargs="+", help="Result CSV file(s)")
    parser.add_argument("--summary", help="Optional path of a grouped summary CSV to write")
    args = parser.parse_args(argv)

    records = []
    for path in args.csv:
        records.extend(read_results_csv(path))
    local, annealing = split_records(records)
    if local:
        print(format_local_search_report(local))
    if annealing:
        print(format_annealing_report(annealing))
    if args.summary:
        out = write_summary_csv(records, args.summary)
        print(f"Summary written: {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
