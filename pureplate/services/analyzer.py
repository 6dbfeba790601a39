from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import openai
from openai import OpenAI

from pureplate.errors import (
    EmptyResponse,
    UpstreamError,
    UpstreamOther,
    UpstreamRateLimited,
)
from pureplate.report_engine import AnalysisResult, parse_report

from .prompt import build_analysis_prompt

ANALYZER_MODEL = os.getenv("ANALYZER_MODEL", "gpt-4.1-mini")
DEFAULT_MAX_OUTPUT_TOKENS = 2048

# Substrings that mark a quota / rate-limit failure in an SDK error message.
RATE_LIMIT_MARKERS = ("429", "resource_exhausted", "insufficient_quota", "rate limit")

# Lazily-initialized OpenAI client
_client: Optional[OpenAI] = None


def _get_client() -> OpenAI:
    """
    Lazily initialize the OpenAI client so that importing this module
    does not explode if the key is missing (e.g. during local tests).
    """
    global _client
    if _client is None:
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            logging.error("OPENAI_API_KEY is not set; analyzer is unavailable.")
            raise UpstreamOther("OPENAI_API_KEY is not set")
        _client = OpenAI(api_key=api_key)
    return _client


def _max_output_tokens() -> int:
    """
    ANALYZER_MAX_OUTPUT_TOKENS, read per call. A malformed value falls back
    to the default instead of breaking the request.
    """
    raw = os.getenv("ANALYZER_MAX_OUTPUT_TOKENS")
    if not raw:
        return DEFAULT_MAX_OUTPUT_TOKENS
    try:
        value = int(raw)
    except ValueError:
        logging.warning(
            "ANALYZER_MAX_OUTPUT_TOKENS=%r is not an integer; using %d.",
            raw,
            DEFAULT_MAX_OUTPUT_TOKENS,
        )
        return DEFAULT_MAX_OUTPUT_TOKENS
    if value <= 0:
        logging.warning(
            "ANALYZER_MAX_OUTPUT_TOKENS=%r must be positive; using %d.",
            raw,
            DEFAULT_MAX_OUTPUT_TOKENS,
        )
        return DEFAULT_MAX_OUTPUT_TOKENS
    return value


def classify_upstream_error(exc: BaseException) -> UpstreamError:
    """
    Turn any SDK / transport exception into UpstreamRateLimited or
    UpstreamOther.
    """
    if isinstance(exc, openai.RateLimitError) or getattr(exc, "status_code", None) == 429:
        return UpstreamRateLimited(str(exc))

    message = str(exc)
    lower = message.lower()
    if any(marker in lower for marker in RATE_LIMIT_MARKERS):
        return UpstreamRateLimited(message)
    return UpstreamOther(message or exc.__class__.__name__)


def extract_citations(response: Any) -> List[Dict[str, Dict[str, str]]]:
    """
    Collect url_citation annotations from a Responses API result and
    reshape them as { "web": { "title", "uri" } } records.
    """
    citations: List[Dict[str, Dict[str, str]]] = []
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for part in getattr(item, "content", None) or []:
            for annotation in getattr(part, "annotations", None) or []:
                if getattr(annotation, "type", None) != "url_citation":
                    continue
                citations.append(
                    {
                        "web": {
                            "title": getattr(annotation, "title", "") or "",
                            "uri": getattr(annotation, "url", "") or "",
                        }
                    }
                )
    return citations


def generate_report(query: str) -> Tuple[str, List[Dict[str, Dict[str, str]]]]:
    """
    Ask the model (with web search) for a plain-text product report.

    Returns:
        (report_text, citations)

    Raises:
        UpstreamRateLimited / UpstreamOther on transport failures.
        EmptyResponse when the model returned no text.
    """
    try:
        client = _get_client()
        response = client.responses.create(
            model=ANALYZER_MODEL,
            tools=[{"type": "web_search"}],
            input=build_analysis_prompt(query),
            max_output_tokens=_max_output_tokens(),
        )
    except UpstreamError:
        raise
    except Exception as e:  # noqa: BLE001
        error = classify_upstream_error(e)
        logging.error("[UPSTREAM ERROR %s] %s", error.code, e)
        raise error from e

    text = getattr(response, "output_text", "") or ""
    if not text.strip():
        logging.warning("[UPSTREAM EMPTY] query=%r", query)
        raise EmptyResponse()

    return text, extract_citations(response)


def analyze_product(query: str) -> AnalysisResult:
    """
    Full pipeline for one product query:
    1. Generate the report upstream
    2. Parse it into an AnalysisResult
    """
    logging.info("[ANALYZE] %s", query)
    text, citations = generate_report(query)
    result = parse_report(text, citations=citations, query=query)
    logging.info(
        "[ANALYZE DONE] %s: %d ingredients, score %s",
        result.product_name,
        len(result.ingredients),
        result.health_score,
    )
    return result
