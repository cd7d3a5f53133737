"""Tests for the HTTP API."""
import pytest

from plate_share.config import settings
from plate_share.main import app

NOTATION = "PN:v1/96/A1:-CompoundA-10-uM-1"
ENCODED = "PN%3Av1%2F96%2FA1%3A-CompoundA-10-uM-1"


class TestHealth:
    """Test health endpoints."""

    def test_root(self, client):
        """Test root endpoint reports the app."""
        assert client.get("/").json()["status"] == "ok"

    def test_health_reports_link_count(self, client):
        """Test health endpoint includes the short link count."""
        assert client.get("/health").json() == {"status": "healthy", "short_links": 0}


class TestShorten:
    """Test short link creation."""

    def test_from_notation(self, client):
        """Test shortening a raw notation uses the request origin."""
        response = client.post(
            "/api/shorten",
            json={"notation": NOTATION},
            headers={"origin": "https://plates.example.com"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["short_url"] == f"https://plates.example.com/s/{body['id']}"

    def test_from_share_url(self, client):
        """Test shortening a share URL reuses the notation's id."""
        by_url = client.post("/api/shorten", json={"url": f"https://h/#pn={ENCODED}"})
        by_notation = client.post("/api/shorten", json={"notation": NOTATION})

        assert by_url.status_code == 200
        assert by_url.json()["id"] == by_notation.json()["id"]

    def test_forwarded_origin(self, client):
        """Test short URL built from forwarded proxy headers."""
        response = client.post(
            "/api/shorten",
            json={"notation": NOTATION},
            headers={"x-forwarded-proto": "http", "x-forwarded-host": "proxy.local"}
        )
        assert response.json()["short_url"].startswith("http://proxy.local/s/")

    def test_host_fallback(self, client):
        """Test short URL falls back to the host header."""
        response = client.post("/api/shorten", json={"notation": NOTATION})
        assert response.json()["short_url"].startswith("https://testserver/s/")

    @pytest.mark.parametrize("payload", [
        {},
        {"notation": "   "},
        {"url": "https://h/#view=grid"},
        {"url": "https://h/#pn=garbage"},
        {"notation": "garbage"},
    ])
    def test_bad_request(self, client, payload):
        """Test requests without usable notation are rejected."""
        response = client.post("/api/shorten", json=payload)
        assert response.status_code == 400

    def test_write_failure(self, client, monkeypatch):
        """Test persistence failure maps to a server error."""
        store = app.state.short_link_store

        def fail(payload):
            raise OSError("read-only file system")

        monkeypatch.setattr(store, "_write_index", fail)
        response = client.post("/api/shorten", json={"notation": NOTATION})
        assert response.status_code == 500


class TestResolve:
    """Test short link redirects."""

    @pytest.fixture(autouse=True)
    def designer_url(self, monkeypatch):
        monkeypatch.setattr(settings, "public_base_url", "https://designer.example/plates")

    def test_redirects_to_notation(self, client):
        """Test short id redirects to the designer with the notation."""
        short_id = client.post("/api/shorten", json={"notation": NOTATION}).json()["id"]

        response = client.get(f"/s/{short_id}", follow_redirects=False)
        assert response.status_code == 307
        assert response.headers["location"] == f"https://designer.example/plates#pn={ENCODED}"

    def test_unknown_id_redirects_home(self, client):
        """Test unknown short id redirects to the blank designer."""
        response = client.get("/s/doesnotexist", follow_redirects=False)
        assert response.status_code == 307
        assert response.headers["location"] == "https://designer.example/plates"


class TestNotationApi:
    """Test encode/decode/stats endpoints."""

    def test_encode(self, client):
        """Test encoding a plate returns notation, URL and stats."""
        response = client.post("/api/notation/encode", json={
            "plate_type": 96,
            "wells": {
                "A1": {"compound": "CompoundA", "concentration": "10",
                       "concentration_units": "uM", "replicate": 1}
            },
            "base_url": "https://h/"
        })

        assert response.status_code == 200
        body = response.json()
        assert body["notation"] == NOTATION
        assert body["share_url"] == f"https://h/#pn={ENCODED}"
        assert body["stats"]["well_count"] == 1

    def test_encode_camel_case_wells(self, client):
        """Test wells sent with the designer's camelCase keys keep every field."""
        response = client.post("/api/notation/encode", json={
            "plate_type": 96,
            "wells": {"A1": {"cellType": "HeLa", "concentrationUnits": "uM"}}
        })

        assert response.status_code == 200
        assert response.json()["notation"] == "PN:v1/96/A1:HeLa---uM"

    def test_encode_well_outside_plate(self, client):
        """Test wells outside the plate bounds are rejected."""
        response = client.post("/api/notation/encode", json={
            "plate_type": 6,
            "wells": {"A1": {"compound": "x"}, "C1": {"compound": "y"}, "A4": {"compound": "z"}}
        })
        assert response.status_code == 422
        assert "A4, C1" in response.json()["detail"]

    def test_encode_invalid_plate_type(self, client):
        """Test unsupported plate type is rejected."""
        response = client.post("/api/notation/encode", json={"plate_type": 7, "wells": {}})
        assert response.status_code == 422

    def test_decode(self, client):
        """Test decoding notation returns the plate layout."""
        response = client.post("/api/notation/decode", json={"notation": NOTATION})

        assert response.status_code == 200
        body = response.json()
        assert body["plate_type"] == 96
        assert body["wells"]["A1"]["compound"] == "CompoundA"
        assert body["wells"]["A1"]["cellType"] is None
        assert body["wells"]["A1"]["concentrationUnits"] == "uM"

    def test_decode_invalid(self, client):
        """Test undecodable notation is rejected."""
        response = client.post("/api/notation/decode", json={"notation": "PN:v0/96/"})
        assert response.status_code == 422

    def test_stats(self, client):
        """Test notation statistics endpoint."""
        response = client.get("/api/notation/stats", params={"notation": "PN:v1/96/A1:x*B2:y"})
        assert response.json() == {"char_count": 18, "well_count": 2, "estimated_qr_version": 1}
