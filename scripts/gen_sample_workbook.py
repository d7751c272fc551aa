#!/usr/bin/env python3
"""Sample workbook generation for manual and performance testing.

Generates a synthetic sponsored-agreements workbook shaped like the real DB
export:
- Row 1: Header row
- Row 2+: Proposal rows

Date columns deliberately mix spreadsheet serial numbers, typed date strings
and free text so that the date normalizer is exercised.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

HEADERS = [
    "DB No.",
    "Date Received",
    "PI Name",
    "Sponsor/Contractor",
    "Status",
    "GCO/GCA/SCCO",
    "Cayuse ID",
    "Status Date",
    "To Set Up",
    "Notes",
    "Old DB#",
]

STATUSES = [
    "OSRAA Review",
    "Out for Review",
    "Completed",
    "Internal Docs/Info Requested",
    "Out for Signature",
    "External Docs/Info Requested",
    "Set-Up in Process",
    # free-text variants seen in real exports (never selectable by the filter)
    "osraa review",
    "Withdrawn",
]

SPONSORS = ["NIH", "NSF", "DOE", "Acme Corp", "Gates Foundation", "DoD", "NASA"]
LAST_NAMES = ["Doe", "Smith", "Nguyen", "Garcia", "Okafor", "Kowalski", "Tanaka"]
FIRST_NAMES = ["Jane", "John", "Ana", "Wei", "Chidi", "Marta", "Kenji"]


def _date_cell(rng: np.random.Generator) -> object:
    serial = int(rng.integers(44927, 46022))  # 2023-01-01 .. 2025-12-31
    kind = rng.choice(["serial", "iso", "us", "text", "blank"], p=[0.6, 0.15, 0.15, 0.05, 0.05])
    if kind == "serial":
        return serial
    day = pd.Timestamp("1899-12-30") + pd.Timedelta(days=serial)
    if kind == "iso":
        return day.strftime("%Y-%m-%d")
    if kind == "us":
        return day.strftime("%m/%d/%Y")
    if kind == "text":
        return "N/A"
    return None


def generate_proposal_data(rows: int, owners: list[str], seed: int = 42) -> pd.DataFrame:
    """Generate synthetic proposal rows with the real export's header layout."""
    rng = np.random.default_rng(seed)
    data: dict[str, list[object]] = {h: [] for h in HEADERS}
    for i in range(rows):
        data["DB No."].append(1000 + i)
        data["Date Received"].append(_date_cell(rng))
        data["PI Name"].append(f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}")
        data["Sponsor/Contractor"].append(str(rng.choice(SPONSORS)))
        data["Status"].append(str(rng.choice(STATUSES)))
        data["GCO/GCA/SCCO"].append(str(rng.choice(owners)))
        data["Cayuse ID"].append(f"{int(rng.integers(10, 99))}-{int(rng.integers(1000, 9999))}")
        data["Status Date"].append(_date_cell(rng))
        data["To Set Up"].append(_date_cell(rng))
        data["Notes"].append("" if rng.random() < 0.7 else "Awaiting budget revision")
        data["Old DB#"].append(None if rng.random() < 0.8 else f"OLD-{int(rng.integers(100, 999))}")
    return pd.DataFrame(data, columns=HEADERS)


def create_workbook(output_path: Path, rows: int, owners: list[str], seed: int = 42) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = generate_proposal_data(rows, owners, seed)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="FY26", index=False)
    print(f"Created workbook: {output_path}")
    print(f"  Rows: {rows} (+ 1 header row)")
    print(f"  Owners: {', '.join(owners)}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic sponsored-agreements workbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/sample.xlsx
  %(prog)s data/large.xlsx --rows 20000 --owners Haugaard Smith Lee --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output workbook path")
    parser.add_argument("--rows", type=int, default=500, help="Number of proposal rows (default: 500)")
    parser.add_argument(
        "--owners", nargs="+", default=["Haugaard", "Smith", "Lee"], help="GCO/GCA/SCCO values to draw from"
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1

    try:
        create_workbook(args.output, args.rows, args.owners, args.seed)
    except OSError as e:
        print(f"Error generating workbook: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
