from __future__ import annotations

from .config import DEFAULT_CONFIG, ExtractionConfig


# ---------------------------------------------------------------------------
# RULE-BASED STATUS CLASSIFICATION
# ---------------------------------------------------------------------------

def classify_status(raw_status: str, config: ExtractionConfig = DEFAULT_CONFIG) -> str:
    """
    Map a free-text status label onto healthy / harmful / neutral.

    Keyword containment, harmful checked before healthy, so
    "not safe, harmful in excess" ends up harmful.
    """
    lower = (raw_status or "").lower()

    if any(k in lower for k in config.harmful_keywords):
        return "harmful"
    if any(k in lower for k in config.healthy_keywords):
        return "healthy"

    return "neutral"
