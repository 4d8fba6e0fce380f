"""Load the static profile and env configuration."""
from __future__ import annotations

import functools
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

from jobmatch.log import get_logger
from jobmatch.models import UserProfile

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
PROFILE_PATH: Path = CONFIG_DIR / "profile.yaml"
REPORTS_DIR: Path = ROOT_DIR / "reports"

DEFAULT_CACHE_TTL_SECONDS = 600
DEFAULT_PAGE_SIZE = 20


def read_profile(path: Path) -> UserProfile:
    if not path.exists():
        raise FileNotFoundError(f"Profile not found at {path} — copy config/profile.yaml and edit it")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Profile at {path} must be a mapping")
    # profile.yaml may nest everything under a top-level "profile:" key
    if isinstance(data.get("profile"), dict):
        data = data["profile"]
    return UserProfile.from_dict(data)


@functools.lru_cache(maxsize=1)
def load_profile() -> UserProfile:
    """The process-wide profile, read once from PROFILE_PATH."""
    profile = read_profile(PROFILE_PATH)
    log.info("Loaded profile %r with %d skills", profile.name, len(profile.skills))
    return profile


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def get_int_env(key: str, default: int) -> int:
    raw = get_env(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning("Ignoring non-numeric %s=%r, using %d", key, raw, default)
        return default


def get_bool_env(key: str, default: bool = False) -> bool:
    raw = get_env(key)
    if not raw:
        return default
    return raw.lower() in ("1", "true", "yes", "on")


def cache_ttl_seconds() -> int:
    return max(0, get_int_env("CACHE_TTL_SECONDS", DEFAULT_CACHE_TTL_SECONDS))


def page_size() -> int:
    return max(1, get_int_env("PAGE_SIZE", DEFAULT_PAGE_SIZE))


def ensure_dirs() -> None:
    REPORTS_DIR.mkdir(parents=True, exist_ok=True)
