from __future__ import annotations

from vision_app.config import MODE_COPY, Settings
from vision_app.models import Mode


def test_defaults_match_backend_contract(monkeypatch):
    for name in ("EDGE_VISION_API_BASE_URL", "EDGE_VISION_POLL_INTERVAL_SECONDS", "EDGE_VISION_POLL_MAX_ATTEMPTS"):
        monkeypatch.delenv(name, raising=False)

    s = Settings(_env_file=None)

    assert s.api_base_url == "http://0.0.0.0:8080"
    assert s.poll_interval_seconds == 5.0
    assert s.poll_max_attempts == 12
    assert s.upload_dir is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("EDGE_VISION_API_BASE_URL", "http://edge-box:9000")
    monkeypatch.setenv("EDGE_VISION_POLL_MAX_ATTEMPTS", "30")
    monkeypatch.setenv("EDGE_VISION_UPLOAD_DIR", "/srv/uploads")

    s = Settings(_env_file=None)

    assert s.api_base_url == "http://edge-box:9000"
    assert s.poll_max_attempts == 30
    assert s.upload_dir == "/srv/uploads"


def test_every_mode_has_screen_copy():
    assert set(MODE_COPY) == {m.value for m in Mode}
    assert all(len(c["steps"]) == 3 for c in MODE_COPY.values())
