from __future__ import annotations

import logging
import re
from typing import List, Optional

from .classifier import classify_status
from .config import DEFAULT_CONFIG, ExtractionConfig
from .contract import Ingredient

# Section markers that end a multi-line span (SUMMARY / FSSAI_NOTICE).
SPAN_STOP_MARKERS = ("HEALTH_SCORE", "FSSAI_NOTICE", "LIST_START")

# Single-line headers; they also end a span, but only at the start of a line
# so that prose like "this product ..." does not cut a summary short.
HEADER_KEYS = ("PRODUCT", "SUMMARY")

# Optional markdown emphasis the generator sometimes wraps keys in: **KEY:**
_KEY_PREFIX = r"^[ \t]*[*_#]*[ \t]*"
_KEY_SUFFIX = r"[ \t]*[*_]*[ \t]*:"

_TABLE_RE = re.compile(r"LIST_START([\s\S]*?)LIST_END", re.IGNORECASE)
_LIST_MARKER_RE = re.compile(r"^(?:[-*•–—]+|\d+\.)\s*")
_SEPARATOR_ROW_RE = re.compile(r"^[\s|:\-]*$")
_LEADING_INT_RE = re.compile(r"[+-]?\d+")

HEADER_ROW_NAMES = {"name", "[name]", "ingredient", "ingredients"}


def _clean(value: str) -> str:
    # Trim whitespace and stray markdown emphasis around a captured value.
    return value.strip().strip("*_").strip()


def _scalar_re(key: str) -> re.Pattern:
    return re.compile(
        rf"{_KEY_PREFIX}{re.escape(key)}{_KEY_SUFFIX}(.*)$",
        re.IGNORECASE | re.MULTILINE,
    )


def _span_re(key: str) -> re.Pattern:
    stops = [re.escape(m) for m in SPAN_STOP_MARKERS if m != key]
    stops += [f"{_KEY_PREFIX}{k}{_KEY_SUFFIX}" for k in HEADER_KEYS if k != key]
    return re.compile(
        rf"{re.escape(key)}{_KEY_SUFFIX}([\s\S]*?)(?={'|'.join(stops)}|\Z)",
        re.IGNORECASE | re.MULTILINE,
    )


# ---------------------------------------------------------------------------
# PASS 1: single-line header fields
# ---------------------------------------------------------------------------

def extract_scalar(text: str, key: str) -> Optional[str]:
    """
    Return the rest of the first line that starts with `KEY:`, trimmed.

    None when the key is missing or its value is empty.
    """
    match = _scalar_re(key).search(text)
    if not match:
        return None
    value = _clean(match.group(1))
    return value or None


def extract_product_name(text: str, fallback: str) -> str:
    return extract_scalar(text, "PRODUCT") or fallback


def extract_health_score(text: str, config: ExtractionConfig = DEFAULT_CONFIG) -> int:
    """
    Leading integer of the HEALTH_SCORE line ("35/100" -> 35).

    Missing or non-numeric values fall back to the configured default.
    Out-of-range values are passed through untouched.
    """
    raw = extract_scalar(text, "HEALTH_SCORE")
    if raw is None:
        return config.default_health_score
    match = _LEADING_INT_RE.match(raw)
    if not match:
        return config.default_health_score
    return int(match.group(0))


# ---------------------------------------------------------------------------
# PASS 2: multi-line spans
# ---------------------------------------------------------------------------

def extract_span(text: str, key: str) -> Optional[str]:
    """
    Capture everything after `KEY:` up to the next section marker or the
    end of the text, across line breaks.
    """
    match = _span_re(key).search(text)
    if not match:
        return None
    value = _clean(match.group(1))
    return value or None


def extract_summary(text: str, config: ExtractionConfig = DEFAULT_CONFIG) -> str:
    return extract_span(text, "SUMMARY") or config.default_summary


def extract_fssai_notice(text: str) -> Optional[str]:
    """
    The regulatory notice, or None when absent or when the generator
    wrote some variant of "None".
    """
    notice = extract_span(text, "FSSAI_NOTICE")
    if notice is None or "none" in notice.lower():
        return None
    return notice


# ---------------------------------------------------------------------------
# PASS 3: ingredient table
# ---------------------------------------------------------------------------

def split_row(line: str) -> List[str]:
    """
    Strip list markers from one table line and split it on pipes.
    """
    row = line.strip()
    row = _LIST_MARKER_RE.sub("", row, count=1).strip()

    # Markdown table rows: | a | b | c |
    if len(row) > 1 and row.startswith("|") and row.endswith("|"):
        row = row[1:-1]

    return [_clean(p) for p in row.split("|")]


def _is_header_row(fields: List[str]) -> bool:
    status = fields[2] if len(fields) > 2 else ""
    return fields[0].lower() in HEADER_ROW_NAMES and "status" in status.lower()


def parse_row(line: str, config: ExtractionConfig = DEFAULT_CONFIG) -> Optional[Ingredient]:
    """
    Turn one `name | quantity | status | reason` line into an Ingredient.

    Returns None for anything that is not a usable row: blank lines,
    markdown separators, header rows, rows with too few fields or no name.
    """
    if _SEPARATOR_ROW_RE.match(line):
        return None

    fields = split_row(line)
    if len(fields) < config.min_row_fields:
        return None
    if not fields[0] or _is_header_row(fields):
        return None

    quantity = fields[1] if len(fields) > 1 and fields[1] else config.default_quantity
    description = fields[3] if len(fields) > 3 and fields[3] else config.default_description

    return Ingredient(
        name=fields[0],
        quantity=quantity,
        status=classify_status(fields[2] if len(fields) > 2 else "", config),
        description=description,
    )


def extract_table_lines(text: str) -> List[str]:
    """
    Lines strictly between LIST_START and LIST_END. Empty when either
    marker is missing.
    """
    match = _TABLE_RE.search(text)
    if not match:
        return []
    return match.group(1).strip().splitlines()


def extract_ingredients(text: str, config: ExtractionConfig = DEFAULT_CONFIG) -> List[Ingredient]:
    ingredients: List[Ingredient] = []
    for line in extract_table_lines(text):
        ingredient = parse_row(line, config)
        if ingredient is None:
            if line.strip():
                logging.debug("[ROW SKIPPED] %r", line)
            continue
        ingredients.append(ingredient)
    return ingredients
