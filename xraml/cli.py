"""Command that generates the RAML libraries from the data directory."""

from __future__ import annotations

import argparse
import sys
import xml.etree.ElementTree as ET
from typing import List, Optional

from xraml.raml import create_raml_metadata_stream
from xraml.spec_csv import read_as_csv

INDIVIDUAL_CONTRACT_OBJ_PATH = "data/IndividualContract__c.object"
SOEC_OBJ_PATH = "data/SalesOrderEmploymentConditions__c.object"
IC_RAML = "individual_contract.raml"
SOEC_RAML = "sales_order_employment_conditions.raml"
IC_CSV = "data/kobetu.csv"
SOEC_CSV = "data/keiyaku.csv"


def _run() -> None:
    jobs = [
        (read_as_csv(IC_CSV), INDIVIDUAL_CONTRACT_OBJ_PATH, IC_RAML),
        (read_as_csv(SOEC_CSV), SOEC_OBJ_PATH, SOEC_RAML),
    ]
    for csv, object_path, raml_file in jobs:
        required = csv.acquire_required_rows_name()
        create_raml_metadata_stream(object_path).create_raml_file_minimal(
            required, raml_file
        )


def main(argv: Optional[List[str]] = None) -> int:
    """Write a minimal RAML library for each object into ``data/``."""
    parser = argparse.ArgumentParser(
        prog="xraml",
        description="Generate RAML libraries of the required fields in data/.",
    )
    parser.parse_args(argv)
    try:
        _run()
    except (OSError, ValueError, ET.ParseError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())