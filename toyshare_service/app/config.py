from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from .models.badge import DEFAULT_BADGE_TABLE, BadgeTable, BadgeTier


DEFAULT_CONFIG_FILE_NAME = "config.yaml"
CONFIG_PATH_ENV = "TOYSHARE_CONFIG"


@dataclass(slots=True)
class AuthConfig:
    session_ttl_hours: int = 24 * 7
    cookie_name: str = "session_token"
    cookie_secure: bool = False
    admin_usernames: list[str] = field(default_factory=list)


@dataclass(slots=True)
class SustainabilityConfig:
    toy_shared_points: int = 5
    exchange_points: int = 3
    badges: BadgeTable = field(default_factory=lambda: DEFAULT_BADGE_TABLE)


@dataclass(slots=True)
class ListingsConfig:
    default_distance_miles: float = 10.0
    waste_per_toy_kg: float = 0.5


@dataclass(slots=True)
class AppConfig:
    """toyshare-service 전체 설정 루트."""

    auth: AuthConfig = field(default_factory=AuthConfig)
    sustainability: SustainabilityConfig = field(default_factory=SustainabilityConfig)
    listings: ListingsConfig = field(default_factory=ListingsConfig)


def _find_config_path() -> Path:
    """TOYSHARE_CONFIG 가 있으면 그 경로를, 없으면 작업 디렉토리부터 상위로 올라가며 config.yaml 을 찾는다."""

    explicit = os.getenv(CONFIG_PATH_ENV, "").strip()
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            raise RuntimeError(f"{CONFIG_PATH_ENV} points to a missing file: {path}")
        return path

    current = Path.cwd()
    for directory in (current, *current.parents):
        candidate = directory / DEFAULT_CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate

    raise RuntimeError(
        f"{DEFAULT_CONFIG_FILE_NAME} not found. Place config.yaml in project root.",
    )


def _as_int(section: str, key: str, raw: Any, path: Path) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:  # noqa: TRY003
        raise RuntimeError(f"invalid {section}.{key} in {path}: {raw!r}") from exc


def _as_float(section: str, key: str, raw: Any, path: Path) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:  # noqa: TRY003
        raise RuntimeError(f"invalid {section}.{key} in {path}: {raw!r}") from exc


def _parse_auth(data: dict, path: Path) -> AuthConfig:
    defaults = AuthConfig()
    admin_raw = data.get("admin_usernames") or []
    if not isinstance(admin_raw, list):
        raise RuntimeError(f"auth.admin_usernames must be a list in {path}")

    return AuthConfig(
        session_ttl_hours=_as_int(
            "auth",
            "session_ttl_hours",
            data.get("session_ttl_hours", defaults.session_ttl_hours),
            path,
        ),
        cookie_name=str(data.get("cookie_name") or defaults.cookie_name).strip(),
        cookie_secure=bool(data.get("cookie_secure", defaults.cookie_secure)),
        admin_usernames=[str(name).strip() for name in admin_raw if str(name).strip()],
    )


def _parse_badges(raw: Any, path: Path) -> BadgeTable:
    if not raw:
        return DEFAULT_BADGE_TABLE
    if not isinstance(raw, list):
        raise RuntimeError(f"sustainability.badges must be a list in {path}")

    tiers: list[BadgeTier] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        name = str(item.get("name", "")).strip()
        if not name:
            continue
        tiers.append(
            BadgeTier(
                name=name,
                min_score=_as_int("sustainability.badges", "min_score", item.get("min_score", 0), path),
                icon=str(item.get("icon") or ""),
            )
        )

    try:
        return BadgeTable(tiers=tiers)
    except ValueError as exc:
        raise RuntimeError(f"invalid sustainability.badges in {path}: {exc}") from exc


def _parse_sustainability(data: dict, path: Path) -> SustainabilityConfig:
    defaults = SustainabilityConfig()
    return SustainabilityConfig(
        toy_shared_points=_as_int(
            "sustainability",
            "toy_shared_points",
            data.get("toy_shared_points", defaults.toy_shared_points),
            path,
        ),
        exchange_points=_as_int(
            "sustainability",
            "exchange_points",
            data.get("exchange_points", defaults.exchange_points),
            path,
        ),
        badges=_parse_badges(data.get("badges"), path),
    )


def _parse_listings(data: dict, path: Path) -> ListingsConfig:
    defaults = ListingsConfig()
    return ListingsConfig(
        default_distance_miles=_as_float(
            "listings",
            "default_distance_miles",
            data.get("default_distance_miles", defaults.default_distance_miles),
            path,
        ),
        waste_per_toy_kg=_as_float(
            "listings",
            "waste_per_toy_kg",
            data.get("waste_per_toy_kg", defaults.waste_per_toy_kg),
            path,
        ),
    )


def load_config(path: Path | None = None) -> AppConfig:
    """config.yaml 을 읽어 AppConfig 로 반환한다. 없는 섹션/키는 기본값을 사용한다."""

    path = path or _find_config_path()
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return AppConfig(
        auth=_parse_auth(data.get("auth") or {}, path),
        sustainability=_parse_sustainability(data.get("sustainability") or {}, path),
        listings=_parse_listings(data.get("listings") or {}, path),
    )


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """FastAPI DI용 설정 로더. 프로세스당 한 번만 파일을 읽는다."""

    return load_config()
