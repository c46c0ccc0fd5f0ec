from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from docsnap.core.model.snapshot import DocumentSnapshot
from docsnap.main import app
from docsnap.settings import get_settings
from tests.snapshot_factory import make_two_page_document


@pytest.fixture()
def client() -> TestClient:
    get_settings.cache_clear()
    return TestClient(app)


@pytest.fixture()
def document() -> DocumentSnapshot:
    return make_two_page_document()
