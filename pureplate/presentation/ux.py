from __future__ import annotations

from typing import Any, Dict, List, Tuple

from pureplate.errors import AnalyzerError, UpstreamRateLimited
from pureplate.report_engine import AnalysisResult, Ingredient

ReportPayload = Dict[str, Any]

# Score tiers: >= 70 favorable, 40-69 caution, < 40 adverse
FAVORABLE_MIN = 70
CAUTION_MIN = 40

GENERIC_ERROR_MESSAGE = "Something went wrong while scanning the product."


def score_tier(score: int) -> str:
    if score >= FAVORABLE_MIN:
        return "favorable"
    if score >= CAUTION_MIN:
        return "caution"
    return "adverse"


def group_ingredients(result: AnalysisResult) -> Tuple[List[Ingredient], List[Ingredient]]:
    """
    Split ingredients into the two UI buckets.

    Returns:
        (safe, concern): concern holds harmful ones, safe holds the rest.
        Both keep the report's original order.
    """
    return list(result.safe_ingredients), list(result.harmful_ingredients)


def build_report_payload(result: AnalysisResult) -> ReportPayload:
    """
    Build the JSON body the front-end renders: the result contract plus
    the score tier and the safe / concern buckets.
    """
    safe, concern = group_ingredients(result)
    payload: ReportPayload = dict(result.to_dict())
    payload["scoreTier"] = score_tier(result.health_score)
    payload["safe"] = [i.to_dict() for i in safe]
    payload["concern"] = [i.to_dict() for i in concern]
    return payload


def user_message_for(exc: BaseException) -> str:
    """
    User-facing text for a failed request. Rate limits get retry guidance,
    analyzer errors show their own message, anything unexpected gets the
    generic message (the raw text only goes to the log).
    """
    if isinstance(exc, UpstreamRateLimited):
        return exc.user_message
    if isinstance(exc, AnalyzerError):
        return exc.user_message or GENERIC_ERROR_MESSAGE
    return GENERIC_ERROR_MESSAGE
