"""
datamesh/services package marker.
"""

from datamesh.services.extraction import (
    DataPointReferenceError,
    extract_data_point,
    extract_data_with_metadata,
    extract_multiple_data_points,
    extract_unique_values,
)
from datamesh.services.frame_export import to_dataframe
from datamesh.services.ingestion_service import DatasetIngestionService, get_ingestion_service
from datamesh.services.merger import DataMerger, MergeContractError, align_positions
from datamesh.services.processor import (
    Aggregation,
    AggregationOp,
    DataProcessor,
    ProcessingError,
)

__all__ = [
    "Aggregation",
    "AggregationOp",
    "DataMerger",
    "DataPointReferenceError",
    "DataProcessor",
    "DatasetIngestionService",
    "MergeContractError",
    "ProcessingError",
    "align_positions",
    "extract_data_point",
    "extract_data_with_metadata",
    "extract_multiple_data_points",
    "extract_unique_values",
    "get_ingestion_service",
    "to_dataframe",
]
