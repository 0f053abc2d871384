"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import logging
import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local rustsyms package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of rustsyms modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("rustsyms"):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def isolate_user_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ~/.config/rustsyms/config.yaml and RUSTSYMS__* env vars out of every test."""
    from rustsyms.config import loader

    monkeypatch.setattr(loader, "GLOBAL_CONFIG_PATH", tmp_path / "global-config.yaml")
    for key in list(os.environ):
        if key.startswith("RUSTSYMS__") or key.startswith("OTEL_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers a test installed (CLI runs bind them to short-lived streams)."""
    yield
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
