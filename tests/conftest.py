from __future__ import annotations

import pytest

from textcomplete.common.config import CONFIG_PATH_ENV, ENV_VARS


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's real credentials and overrides out of the tests."""
    for var in (*ENV_VARS.values(), CONFIG_PATH_ENV):
        monkeypatch.delenv(var, raising=False)
