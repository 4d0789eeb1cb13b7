import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

ERRORS_FILE = Path(__file__).resolve().parent / "errors.json"


@pytest.fixture
def errors_file() -> Path:
    return ERRORS_FILE


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "ERROR_MANAGER_SETTINGS_FILE",
        "ERROR_MANAGER_VALIDATE",
        "ERROR_MANAGER_INCLUDE_CODE",
        "ERROR_MANAGER_ENCODING",
        "ERROR_MANAGER_SCHEMA",
        "ERROR_MANAGER_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
