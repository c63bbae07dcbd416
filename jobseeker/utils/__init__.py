"""Utility modules."""

from jobseeker.utils.logging import configure_logging
from jobseeker.utils.parser import ParseError, SchemaError, ValidatedAnalysis, find_json_object, parse_analysis_response

__all__ = [
    "configure_logging",
    "find_json_object",
    "parse_analysis_response",
    "ValidatedAnalysis",
    "ParseError",
    "SchemaError",
]
