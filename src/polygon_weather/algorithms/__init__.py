"""
Geometry and classification algorithms.

Provides polygon sampling helpers and threshold color classification.
"""

from .geometry import centroid, normalize_longitude, sample_point, validate_vertices
from .classifier import RuleClassifier, classify, format_value

__all__ = [
    "centroid",
    "normalize_longitude",
    "sample_point",
    "validate_vertices",
    "RuleClassifier",
    "classify",
    "format_value",
]
