from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, jsonify, request

from pureplate.api.state import begin_query, finish_query, is_current
from pureplate.errors import (
    AnalyzerError,
    EmptyResponse,
    ExtractionError,
    UpstreamOther,
    UpstreamRateLimited,
)
from pureplate.presentation import build_report_payload, user_message_for
from pureplate.report_engine import AnalysisResult, parse_report
from pureplate.report_engine.validator import validate_result
from pureplate.services import analyzer

api = Blueprint("api", __name__)

# Error kind -> HTTP status
ERROR_STATUS = {
    UpstreamRateLimited: 429,
    ExtractionError: 422,
    EmptyResponse: 502,
    UpstreamOther: 502,
}


def _error_response(exc: BaseException) -> Tuple[Any, int]:
    status = 500
    for kind, code in ERROR_STATUS.items():
        if isinstance(exc, kind):
            status = code
            break
    error_code = exc.code if isinstance(exc, AnalyzerError) else "INTERNAL_ERROR"
    return jsonify({"ok": False, "error": error_code, "message": user_message_for(exc)}), status


def _stale_response() -> Tuple[Any, int]:
    return jsonify({
        "ok": False,
        "error": "STALE_REQUEST",
        "message": "A newer query replaced this one.",
    }), 409


def _success_response(result: AnalysisResult) -> Tuple[Any, int]:
    payload = build_report_payload(result)

    # Schema validation; violations are reported, not fatal
    issues = []
    is_valid, err = validate_result(result.to_dict())
    if not is_valid and err:
        logging.warning("[SCHEMA WARNING] %s: %s", result.product_name, err)
        issues.append(f"Schema validation failed: {err}")

    return jsonify({"ok": True, "result": payload, "issues": issues}), 200


def _client_id(body: Dict[str, Any]) -> Optional[str]:
    client_id = body.get("client_id") or request.headers.get("X-Client-Id")
    return str(client_id) if client_id else None


@api.route("/", methods=["GET"])
def healthcheck() -> str:
    return "PurePlate analyzer running"


@api.route("/analyze", methods=["POST"])
def analyze() -> Any:
    """
    Analyze one product by name.

    Body: { "query": "<product name>", "client_id": "<optional>" }

    When the same client_id starts a newer query before this one finishes,
    this response is discarded with 409 STALE_REQUEST.
    """
    body: Dict[str, Any] = request.get_json(silent=True) or {}
    query = str(body.get("query") or "").strip()
    if not query:
        return jsonify({"ok": False, "error": "BAD_REQUEST", "message": "query is required"}), 400

    client_id = _client_id(body)
    token = begin_query(client_id) if client_id else None

    result: Optional[AnalysisResult] = None
    error: Optional[Exception] = None
    try:
        result = analyzer.analyze_product(query)
    except Exception as e:  # noqa: BLE001
        error = e

    if client_id and token:
        stale = not is_current(client_id, token)
        finish_query(client_id, token)
        if stale:
            logging.info("[STALE RESULT] client=%s query=%r", client_id, query)
            return _stale_response()

    if error is not None:
        if isinstance(error, AnalyzerError):
            logging.error("[ANALYZE ERROR %s] %s: %s", error.code, query, error)
        else:
            logging.error("[ANALYZE ERROR] %s: %s", query, error, exc_info=error)
        return _error_response(error)

    return _success_response(result)


@api.route("/parse", methods=["POST"])
def parse() -> Any:
    """
    Run only the report engine on caller-supplied text.

    Body: { "text": "<report>", "citations": [...], "query": "<fallback name>" }
    """
    body: Dict[str, Any] = request.get_json(silent=True) or {}
    text = body.get("text")
    if not isinstance(text, str):
        return jsonify({"ok": False, "error": "BAD_REQUEST", "message": "text is required"}), 400

    citations = body.get("citations") or []
    if not isinstance(citations, list):
        return jsonify({"ok": False, "error": "BAD_REQUEST", "message": "citations must be a list"}), 400

    try:
        result = parse_report(text, citations=citations, query=str(body.get("query") or ""))
    except AnalyzerError as e:
        logging.error("[PARSE ERROR %s] %s", e.code, e)
        return _error_response(e)

    return _success_response(result)
