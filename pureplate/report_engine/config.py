from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Row acceptance
MIN_ROW_FIELDS = 3

# Field defaults
DEFAULT_HEALTH_SCORE = 50
DEFAULT_QUANTITY = "N/A"
DEFAULT_SUMMARY = "Analysis complete."
DEFAULT_DESCRIPTION = "Major component found in product label."

# Status keywords, checked in this order: harmful first, then healthy.
HARMFUL_KEYWORDS: Tuple[str, ...] = ("harmful", "bad", "danger", "concern")
HEALTHY_KEYWORDS: Tuple[str, ...] = ("healthy", "good", "safe")


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Every threshold and fallback value the report parser uses.

    Pass a modified copy to parse_report() to change behaviour without
    touching the extraction passes.
    """
    min_row_fields: int = MIN_ROW_FIELDS
    default_health_score: int = DEFAULT_HEALTH_SCORE
    default_quantity: str = DEFAULT_QUANTITY
    default_summary: str = DEFAULT_SUMMARY
    default_description: str = DEFAULT_DESCRIPTION
    harmful_keywords: Tuple[str, ...] = HARMFUL_KEYWORDS
    healthy_keywords: Tuple[str, ...] = HEALTHY_KEYWORDS


DEFAULT_CONFIG = ExtractionConfig()
