import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Tuple

from jsonschema import ValidationError, validate

# JSON Schema describing AnalysisResult.to_dict()
RESULT_SCHEMA_PATH = Path(__file__).parent / "schemas" / "analysis_result.json"


@lru_cache(maxsize=None)
def load_result_schema() -> Dict[str, Any]:
    with open(RESULT_SCHEMA_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_result(data: Dict[str, Any]) -> Tuple[bool, str]:
    """
    Check a serialised AnalysisResult against the result contract.

    The parser substitutes defaults but never clamps, so a payload can be
    structurally fine and still break the contract (a health score of 150,
    say). The API reports such a mismatch in its `issues` list and still
    returns the result, so this returns the first violation instead of
    raising.

    Returns:
        (ok, first_violation_message); the message is "" when ok.
    """
    try:
        validate(instance=data, schema=load_result_schema())
    except ValidationError as e:
        return False, e.message
    return True, ""
