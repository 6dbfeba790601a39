"""
PurePlate report engine

This package turns the free-form report written by the generative backend
into a typed AnalysisResult:
- Pull header fields and spans (product, summary, score, FSSAI notice)
- Parse the pipe-delimited ingredient table and classify each status
- Map web citations into sources

Nothing in this package should talk directly to Flask or OpenAI.
It is pure logic.
"""

from .config import DEFAULT_CONFIG, ExtractionConfig
from .contract import STATUSES, AnalysisResult, Ingredient, Source
from .parser import parse_report

__all__ = [
    "AnalysisResult",
    "DEFAULT_CONFIG",
    "ExtractionConfig",
    "Ingredient",
    "STATUSES",
    "Source",
    "parse_report",
]
