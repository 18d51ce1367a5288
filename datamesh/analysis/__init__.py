"""
datamesh/analysis package marker.
"""

from datamesh.analysis.metadata_extractor import MetadataExtractor
from datamesh.analysis.similarity import levenshtein_distance, name_similarity
from datamesh.analysis.structure_analyzer import (
    StructureAnalyzer,
    find_common_columns,
    looks_like_time_column,
)
from datamesh.analysis.type_inferencer import TypeInferencer

__all__ = [
    "MetadataExtractor",
    "StructureAnalyzer",
    "TypeInferencer",
    "find_common_columns",
    "levenshtein_distance",
    "looks_like_time_column",
    "name_similarity",
]
