from __future__ import annotations

from pathlib import Path

import pytest

from common.mongo.config import MongoSettings
from toyshare_service.app.config import load_config


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_reads_sections(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
auth:
  session_ttl_hours: 12
  admin_usernames: [root, " ops "]
sustainability:
  toy_shared_points: 4
  exchange_points: 2
  badges:
    - name: Seed
      min_score: 0
    - name: Tree
      min_score: 8
listings:
  default_distance_miles: 25
""",
    )

    config = load_config(path)

    assert config.auth.session_ttl_hours == 12
    assert config.auth.admin_usernames == ["root", "ops"]
    assert config.sustainability.toy_shared_points == 4
    assert [t.name for t in config.sustainability.badges.tiers] == ["Seed", "Tree"]
    assert config.listings.default_distance_miles == 25.0
    assert config.listings.waste_per_toy_kg == 0.5


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, ""))

    assert config.auth.cookie_name == "session_token"
    assert config.sustainability.badges.tiers[0].name == "Newcomer"
    assert config.listings.default_distance_miles == 10.0


def test_load_config_rejects_invalid_values(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError):
        load_config(_write(tmp_path, "auth:\n  session_ttl_hours: soon\n"))

    with pytest.raises(RuntimeError):
        load_config(
            _write(
                tmp_path,
                "sustainability:\n  badges:\n"
                "    - {name: B, min_score: 10}\n"
                "    - {name: A, min_score: 0}\n",
            )
        )


def test_mongo_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONGO_URI", " mongodb://localhost:27017/toyshare ")
    monkeypatch.delenv("MONGO_DB_NAME", raising=False)
    monkeypatch.setenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "1500")

    settings = MongoSettings.from_env()

    assert settings.uri == "mongodb://localhost:27017/toyshare"
    assert settings.db_name is None
    assert settings.server_selection_timeout_ms == 1500


def test_mongo_settings_require_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MONGO_URI", raising=False)
    with pytest.raises(RuntimeError):
        MongoSettings.from_env()
