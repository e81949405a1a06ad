import sys
from collections.abc import Generator
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import turnsplit.config as config  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keeps environment-driven settings stable across tests."""
    for name in (
        "TURNSPLIT_USER_KEYWORDS",
        "TURNSPLIT_AI_KEYWORDS",
        "TURNSPLIT_MAX_LABEL_LENGTH",
        "TURNSPLIT_USE_CLASSIFIER",
        "TURNSPLIT_MAX_INPUT_BYTES",
        "TURNSPLIT_OUTPUT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    config.reload_settings()
    yield
    monkeypatch.undo()
    config.reload_settings()
