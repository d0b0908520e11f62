from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class RuntimeConfig:
    artifact_root: Path
    user_name: str | None
    log_level: str


def load_env(dotenv_path: str | Path | None = None) -> None:
    path = Path(dotenv_path) if dotenv_path else None
    if path and path.exists():
        load_dotenv(path)
        return
    load_dotenv()


def runtime_config() -> RuntimeConfig:
    artifact_root = Path(os.getenv("SHIFTSCAN_ARTIFACT_DIR", "./artifacts")).expanduser().resolve()
    user_name = os.getenv("SHIFTSCAN_USER_NAME", "").strip() or None
    log_level = os.getenv("SHIFTSCAN_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
    artifact_root.mkdir(parents=True, exist_ok=True)
    return RuntimeConfig(artifact_root=artifact_root, user_name=user_name, log_level=log_level)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the process."""
    root = logging.getLogger()
    if getattr(root, "_shiftscan_configured", False):
        return
    level = (level or os.getenv("SHIFTSCAN_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    root._shiftscan_configured = True  # type: ignore[attr-defined]


def resolve_target_name(name: str | None, config: RuntimeConfig) -> str:
    """Explicit name, else the configured default user name, else ''."""
    if name and name.strip():
        return name
    return config.user_name or ""
