import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import pureplate...` works when running pytest from repo root
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from pureplate.api import state  # noqa: E402
from pureplate.main import create_app  # noqa: E402

SAMPLE_REPORT = """PRODUCT: Test Snack
SUMMARY: High in sugar.
HEALTH_SCORE: 35
FSSAI_NOTICE: None
LIST_START
Sugar | 35g per 100g | harmful | Excess refined sugar
Rice Flour | 40% | healthy | Whole grain base
LIST_END
"""


@pytest.fixture
def sample_report():
    return SAMPLE_REPORT


@pytest.fixture
def app():
    state.clear_all()
    app = create_app()
    app.config["TESTING"] = True
    yield app
    state.clear_all()


@pytest.fixture
def client(app):
    return app.test_client()
