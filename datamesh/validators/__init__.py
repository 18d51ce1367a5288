"""
datamesh/validators package marker.
"""

from datamesh.validators.dataset_validator import DataValidator, ValidationCode, find_duplicates
from datamesh.validators.reference_validator import (
    ReferenceValidator,
    validate_data_point_references,
)

__all__ = [
    "DataValidator",
    "ReferenceValidator",
    "ValidationCode",
    "find_duplicates",
    "validate_data_point_references",
]
