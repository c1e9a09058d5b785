"""Core services shared by the installer and launcher: release metadata and logging."""

from .config import BootstrapConfig, data_root, install_dir, load_config
from .logging_setup import configure_logging, get_logger

__all__ = [
    "BootstrapConfig",
    "configure_logging",
    "data_root",
    "get_logger",
    "install_dir",
    "load_config",
]
