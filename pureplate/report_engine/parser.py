from __future__ import annotations

from typing import Iterable, Optional

from pureplate.errors import EmptyResponse, ExtractionError

from .citations import RawCitation, map_citations
from .config import DEFAULT_CONFIG, ExtractionConfig
from .contract import AnalysisResult
from .passes import (
    extract_fssai_notice,
    extract_health_score,
    extract_ingredients,
    extract_product_name,
    extract_summary,
)


def parse_report(
    raw_text: str,
    citations: Optional[Iterable[RawCitation]] = None,
    query: str = "",
    config: ExtractionConfig = DEFAULT_CONFIG,
) -> AnalysisResult:
    """
    High-level entrypoint: raw report text -> AnalysisResult.

    Pipeline:
    1. Header fields (PRODUCT, HEALTH_SCORE), with defaults.
    2. Spans (SUMMARY, FSSAI_NOTICE), with defaults.
    3. Ingredient table between LIST_START / LIST_END.
    4. Citation mapping.

    Raises:
        EmptyResponse: raw_text is empty or blank.
        ExtractionError: no ingredient row could be recovered. Whatever
            else was extracted is thrown away.
    """
    if not raw_text or not raw_text.strip():
        raise EmptyResponse()

    ingredients = extract_ingredients(raw_text, config)
    if not ingredients:
        raise ExtractionError()

    return AnalysisResult(
        product_name=extract_product_name(raw_text, fallback=query),
        summary=extract_summary(raw_text, config),
        ingredients=tuple(ingredients),
        health_score=extract_health_score(raw_text, config),
        sources=tuple(map_citations(citations)),
        fssai_notice=extract_fssai_notice(raw_text),
    )
