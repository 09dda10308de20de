"""
Beach seine NMDS workflow, as run by the analyst.

Reads the raw beach seine export, keeps cyprinids and centrarchids, and writes
NMDS / Shepard / CPUE figures to the output directory while printing the
PERMANOVA and ANOSIM tables.

Edit the two paths below to point at your copy of the data.
"""

import logging
from pathlib import Path

from seinedata.config import OUTPUT, RAW_SEINE_CSV
from fishcomm import run_analysis

INPUT_CSV = Path(RAW_SEINE_CSV)
OUTPUT_DIR = Path(OUTPUT)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    print("=== Yolo Bypass beach seines - cyprinids and centrarchids ===\n")
    if not INPUT_CSV.exists():
        print(f"Error: Data file not found at {INPUT_CSV}")
        return

    result = run_analysis(INPUT_CSV, OUTPUT_DIR, write_tables=True)

    print(f"\n{result.nmds.points.shape[0]} sites x {result.prepared.community.shape[1]} taxa")
    print("Figures:")
    for path in result.figures:
        print(f"   {path}")


if __name__ == "__main__":
    main()
