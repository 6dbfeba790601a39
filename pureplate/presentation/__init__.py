# pureplate/presentation/__init__.py
from .ux import (
    build_report_payload,
    group_ingredients,
    score_tier,
    user_message_for,
)

__all__ = [
    "build_report_payload",
    "group_ingredients",
    "score_tier",
    "user_message_for",
]
