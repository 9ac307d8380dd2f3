from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _find_repo_root(start: Path) -> Path:
    """Walk upward until we find pyproject.toml or .git."""
    start = start.resolve()
    for p in (start, *start.parents):
        if (p / "pyproject.toml").exists() or (p / ".git").exists():
            return p
    return start.parent


@lru_cache(maxsize=1)
def repo_root() -> Path:
    return _find_repo_root(PACKAGE_DIR)


@lru_cache(maxsize=1)
def load_env_once() -> Optional[Path]:
    """
    Load dotenv exactly once. Precedence:
      1) FIELD_FILTER_ENV_FILE (explicit path)
      2) repo-root/.env
    Variables already set in the environment win.
    """
    candidates = []
    explicit = os.getenv("FIELD_FILTER_ENV_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.append(repo_root() / ".env")

    for p in candidates:
        if p.is_file():
            load_dotenv(dotenv_path=str(p), override=False)
            return p.resolve()
    return None


def presets_path() -> Path:
    """Presets shown in the preview tool. Override with FIELD_FILTER_PRESETS_PATH."""
    p = os.getenv("FIELD_FILTER_PRESETS_PATH")
    if p:
        return Path(p).expanduser().resolve()
    return PACKAGE_DIR / "presets.json"


def server_name() -> Optional[str]:
    return os.getenv("FIELD_FILTER_SERVER_NAME") or None


def server_port() -> Optional[int]:
    raw = os.getenv("FIELD_FILTER_SERVER_PORT")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring invalid FIELD_FILTER_SERVER_PORT=%r", raw)
        return None


def configure_logging() -> None:
    """
    Configure logging explicitly. No import-time side effects.
    Idempotent: if logging is already configured, do nothing.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    level_name = os.getenv("FIELD_FILTER_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    fmt = os.getenv("FIELD_FILTER_LOG_FORMAT", DEFAULT_LOG_FORMAT)

    logging.basicConfig(level=level, format=fmt)


def init_runtime(*, configure_logs: bool = True, load_env: bool = True) -> None:
    """Call this from entry points only."""
    if load_env:
        load_env_once()
    if configure_logs:
        configure_logging()
