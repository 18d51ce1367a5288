"""
Parse, validate, and analyze delimited files from the command line.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from datamesh.logging_utils import configure_logging
from datamesh.schemas import (
    MergedDataSchema,
    QualityReportSchema,
    StructureSchema,
    ValidationResultSchema,
)
from datamesh.services import get_ingestion_service


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze the structure of delimited text files.")
    parser.add_argument("paths", nargs="+", help="Files to analyze.")
    parser.add_argument(
        "--merge",
        action="store_true",
        help="Execute the suggested merge and include the merged dataset.",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help="Override DATAMESH_LOG_LEVEL for this run.",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    service = get_ingestion_service()

    sources = [(Path(path).name, Path(path).read_bytes()) for path in args.paths]
    batch = service.parse_many(sources)

    files_payload = [
        {
            "file_name": parsed_file.file_name,
            "delimiter": parsed_file.delimiter,
            "row_count": parsed_file.metadata.row_count,
            "validation": ValidationResultSchema.from_domain(service.validate(parsed_file)).model_dump(),
            "quality": QualityReportSchema.from_domain(service.check_quality(parsed_file)).model_dump(),
        }
        for parsed_file in batch.files
    ]

    payload: dict[str, object] = {
        "status": batch.status,
        "files": files_payload,
        "failures": [
            {"file_name": failure.file_name, "code": failure.code, "message": failure.message}
            for failure in batch.failures
        ],
    }

    if batch.files:
        structure = service.analyze_structure(service.extract_all(batch.files))
        payload["structure"] = StructureSchema.from_domain(structure).model_dump()
        if args.merge and structure.suggested_merge is not None:
            merged = service.merge_files(batch.files, structure.suggested_merge)
            payload["merged"] = MergedDataSchema.from_domain(merged).model_dump()

    print(json.dumps(payload, indent=2))
    return 0 if batch.files else 1


if __name__ == "__main__":
    raise SystemExit(main())
