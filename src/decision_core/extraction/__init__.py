"""Parameter extraction: token classification and fuzzy entity resolution."""

from decision_core.extraction.extractor import RESOLUTION_ORDER, ParameterExtractor
from decision_core.extraction.quantity import parse_quantity
from decision_core.extraction.types import ExtractedParameter, ExtractedParameters, ParameterType

__all__ = [
    "RESOLUTION_ORDER",
    "ExtractedParameter",
    "ExtractedParameters",
    "ParameterExtractor",
    "ParameterType",
    "parse_quantity",
]
