from __future__ import annotations

import pytest
from pydantic import ValidationError

from docsnap.settings import Settings, get_settings


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCSNAP_SELECTION_TOLERANCE", "0.5")
    monkeypatch.setenv("docsnap_env", "production")
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.DOCSNAP_SELECTION_TOLERANCE == 0.5
    assert settings.DOCSNAP_ENV == "production"
    get_settings.cache_clear()


def test_settings_reject_bad_geometry(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCSNAP_INDEX_CELL_SIZE", "0")
    monkeypatch.setenv("DOCSNAP_SELECTION_TOLERANCE", "-1")
    with pytest.raises(ValidationError) as excinfo:
        Settings()
    message = str(excinfo.value)
    assert "DOCSNAP_INDEX_CELL_SIZE" in message
    assert "DOCSNAP_SELECTION_TOLERANCE" in message
