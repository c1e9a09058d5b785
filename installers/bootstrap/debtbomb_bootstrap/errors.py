"""Exception hierarchy for the installer and launcher."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class BootstrapError(Exception):
    """Base for all errors that end the current phase."""

    exit_code = 1


class UnsupportedPlatform(BootstrapError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unsupported platform: {value}")


class UnsupportedArchitecture(BootstrapError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unsupported architecture: {value}")


class DownloadFailed(BootstrapError):
    """Network error, redirect loop, or non-2xx response."""

    def __init__(self, url: str, message: str, *, status: int | None = None):
        self.url = url
        self.status = status
        prefix = f"{status} " if status is not None else ""
        super().__init__(f"Failed to download {url}: {prefix}{message}")


class ChecksumMismatch(DownloadFailed):
    def __init__(self, url: str, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(url, f"checksum mismatch (expected {expected}, got {actual})")


class FilesystemError(BootstrapError):
    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class BinaryMissing(BootstrapError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(
            f"Binary not found at {path}. Run 'debtbomb-install' or reinstall the package."
        )


class SpawnFailed(BootstrapError):
    def __init__(self, command: Sequence[str], message: str):
        self.command = list(command)
        super().__init__(f"Failed to start {self.command[0]}: {message}")
