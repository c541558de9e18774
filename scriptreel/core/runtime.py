"""
Runtime environment guards and dependency checks.
"""

import os
from pathlib import Path
from typing import Dict

from .exceptions import ConfigurationError


def parse_bool_env(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def assert_directory_writable(path: Path, *, create: bool = True) -> None:
    if create:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigurationError(f"Cannot create directory: {path}") from exc
    if not path.exists() or not path.is_dir():
        raise ConfigurationError(f"Required directory is missing: {path}")

    probe = path / f".write_probe_{os.getpid()}.tmp"
    try:
        with open(probe, "w", encoding="utf-8") as f:
            f.write("ok")
        probe.unlink(missing_ok=True)
    except OSError as exc:
        raise ConfigurationError(f"Directory is not writable: {path}") from exc


def run_startup_runtime_checks(*, store_dir: Path, strict_dirs: bool = True) -> Dict[str, object]:
    """Check the store directory and report which provider credentials are configured."""
    # Imported here so tests can vary the environment after import.
    from ..config import get_heygen_api_key

    report: Dict[str, object] = {
        "directories": {},
        "credentials": {},
        "ok": True,
    }

    try:
        assert_directory_writable(store_dir)
        report["directories"]["store"] = {"path": str(store_dir), "writable": True}
    except ConfigurationError as exc:
        report["directories"]["store"] = {
            "path": str(store_dir),
            "writable": False,
            "error": str(exc),
        }
        report["ok"] = False
        if strict_dirs:
            raise

    report["credentials"] = {
        "video_provider": bool(get_heygen_api_key()),
        "script_provider": bool(os.getenv("GEMINI_API_KEY") or os.getenv("LLM_PROVIDER", "").lower() == "ollama"),
    }
    return report
