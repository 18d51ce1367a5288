"""
datamesh/validators/reference_validator.py

Validation of data point references against a set of parsed files.
"""

from __future__ import annotations

from typing import Sequence

from datamesh.domain.references import DataPointReference, ReferenceValidation
from datamesh.domain.tabular import ParsedFile


class ReferenceValidator:
    """
    Reports every reference that points outside the provided files.
    """

    def validate(
        self,
        *,
        files: Sequence[ParsedFile],
        references: Sequence[DataPointReference],
    ) -> ReferenceValidation:
        errors: list[str] = []
        files_by_name = {parsed_file.file_name: parsed_file for parsed_file in files}

        for reference in references:
            parsed_file = files_by_name.get(reference.file)
            if parsed_file is None:
                errors.append(f"File not found: {reference.file}")
                continue

            if reference.column not in parsed_file.column_names:
                available = ", ".join(parsed_file.column_names)
                errors.append(
                    f'Column "{reference.column}" not found in file "{reference.file}". '
                    f"Available columns: {available}"
                )
                continue

            if reference.row_index is not None:
                row_count = len(parsed_file.rows)
                if not 0 <= reference.row_index < row_count:
                    errors.append(
                        f"Row index {reference.row_index} out of bounds for file "
                        f'"{reference.file}" (has {row_count} rows)'
                    )

        return ReferenceValidation(valid=not errors, errors=tuple(errors))


def validate_data_point_references(
    files: Sequence[ParsedFile],
    references: Sequence[DataPointReference],
) -> ReferenceValidation:
    return ReferenceValidator().validate(files=files, references=references)
