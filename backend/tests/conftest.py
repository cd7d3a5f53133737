"""Shared test fixtures."""
import pytest
from fastapi.testclient import TestClient

from plate_share.config import settings
from plate_share.models import WellRecord
from plate_share.services import ShortLinkStore


@pytest.fixture
def sample_wells():
    """Small 96-well layout with a compound titration."""
    return {
        "A1": WellRecord(cell_type="HeLa", compound="CompA", concentration="10",
                         concentration_units="uM", replicate=1),
        "A2": WellRecord(cell_type="HeLa", compound="CompA", concentration="5",
                         concentration_units="uM", replicate=1),
        "B1": WellRecord(cell_type="HeLa"),
    }


@pytest.fixture
def store_path(tmp_path):
    """Path for a short link store that does not exist yet."""
    return tmp_path / "data" / "short-links.json"


@pytest.fixture
def store(store_path):
    """Empty short link store."""
    return ShortLinkStore(store_path)


@pytest.fixture
def client(store_path, monkeypatch):
    """API client with the short link store in a temp directory."""
    monkeypatch.setattr(settings, "short_links_path", str(store_path))
    from plate_share.main import app

    with TestClient(app) as test_client:
        yield test_client
