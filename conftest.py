import pytest

from library import Library
from utils.ui_helpers import OUTPUT_MODE_ENV

@pytest.fixture
def lib():
    # Fresh, small library per test
    return Library("Test Library", capacity=10)

@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # Output mode lives in the environment; keep it from leaking between tests
    monkeypatch.delenv(OUTPUT_MODE_ENV, raising=False)
