"""Release metadata schema, load helpers, and on-disk locations."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import dataclass, fields, replace
from importlib import metadata, resources
from pathlib import Path
from typing import Any


DEFAULT_VERSION = "0.1.0"
DISTRIBUTION_NAME = "debtbomb"


@dataclass(frozen=True)
class BootstrapConfig:
    tool: str = "debtbomb"
    repo: str = "jobin-404/debtbomb"
    version: str = DEFAULT_VERSION
    host: str = "github.com"
    max_redirects: int = 5
    timeout_s: int = 60
    verify_checksums: bool = True
    checksums_asset: str = "checksums.txt"


def data_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "DebtBomb"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "DebtBomb"
    return Path.home() / ".local" / "share" / "debtbomb"


def install_dir() -> Path:
    """Directory holding the single resident binary."""
    return data_root() / "bin"


def _installed_version() -> str:
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return DEFAULT_VERSION


def _merge(raw: dict[str, Any]) -> BootstrapConfig:
    known = {f.name for f in fields(BootstrapConfig)}
    values = {k: v for k, v in raw.items() if k in known}
    return replace(BootstrapConfig(), **values)


def _int_or_default(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _normalize(cfg: BootstrapConfig) -> BootstrapConfig:
    defaults = BootstrapConfig()
    return replace(
        cfg,
        version=str(cfg.version).strip() or DEFAULT_VERSION,
        repo=str(cfg.repo).strip("/"),
        max_redirects=max(1, min(20, _int_or_default(cfg.max_redirects, defaults.max_redirects))),
        timeout_s=max(5, min(600, _int_or_default(cfg.timeout_s, defaults.timeout_s))),
        verify_checksums=bool(cfg.verify_checksums),
    )


def _read_packaged() -> dict[str, Any]:
    text = resources.files("debtbomb_core").joinpath("release.json").read_text(encoding="utf-8")
    return json.loads(text)


def load_config(path: Path | None = None) -> BootstrapConfig:
    """Build the immutable config from packaged release metadata.

    ``path`` points at an alternative metadata file. Unreadable or malformed
    metadata falls back to the built-in defaults. A metadata file without a
    ``version`` pins the installed distribution's own version.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8")) if path else _read_packaged()
    except (OSError, ValueError):
        raw = {}
    if not isinstance(raw, dict):
        raw = {}

    raw = dict(raw)
    raw.setdefault("version", _installed_version())
    return _normalize(_merge(raw))
