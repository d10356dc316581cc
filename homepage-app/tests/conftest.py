import os
import tempfile

# Keep the suite away from the real data/config.json
os.environ["HOMEPAGE_DATA_DIR"] = tempfile.mkdtemp(prefix="homepage-test-")

import pytest

from homepage.services import admin_ip_service, geo_service, media_service, telegram_service


@pytest.fixture
def admin_store():
    return admin_ip_service.MemoryAdminIPStore(["10.0.0.1"])


@pytest.fixture
def notifications(monkeypatch):
    sent = []
    monkeypatch.setattr(telegram_service, "notify", sent.append)
    return sent


@pytest.fixture
def media_dirs(tmp_path, monkeypatch):
    images = tmp_path / "images"
    music = tmp_path / "music"
    images.mkdir()
    music.mkdir()
    monkeypatch.setattr(media_service, "IMAGES_DIR", images)
    monkeypatch.setattr(media_service, "MUSIC_DIR", music)
    return images, music


@pytest.fixture
def geo_lookups(monkeypatch):
    seen = []

    def fake_lookup(ip):
        seen.append(ip)
        return {"query": ip, "city": "Oslo", "country": "Norway", "isp": "Telenor"}

    monkeypatch.setattr(geo_service, "lookup", fake_lookup)
    return seen


@pytest.fixture
def app(admin_store, notifications, media_dirs, geo_lookups):
    from site_server import create_app

    app = create_app(admin_store=admin_store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
