"""Pytest configuration for harsnip tests."""

import sys
from pathlib import Path

import pytest
import structlog
from structlog._config import BoundLoggerLazyProxy

# Add src directory to sys.path for test imports
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate each test from HARSNIP_* environment variables and .env files.

    This fixture:
    - Removes any HARSNIP_ variables from the environment
    - Runs the test from a temporary directory so no .env file is picked up
    - Resets the global settings instance before each test
    """
    import os

    for name in list(os.environ):
        if name.startswith("HARSNIP_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)

    from harsnip.config import reset_settings

    reset_settings()


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Reset structlog after each test to prevent closed file handle errors.

    CliRunner captures stderr with a temporary file. When configure_logging()
    runs inside CliRunner, structlog binds loggers to that temp file. After
    the test, CliRunner closes the file.
    """
    yield
    structlog.reset_defaults()
    for module in list(sys.modules.values()):
        for attr in getattr(module, "__dict__", {}).values():
            if isinstance(attr, BoundLoggerLazyProxy):
                attr.__dict__.pop("bind", None)


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding JSON and HAR fixtures."""
    return Path(__file__).parent / "fixtures"
