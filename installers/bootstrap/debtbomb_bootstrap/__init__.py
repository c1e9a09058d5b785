"""Bootstrap installer and launcher for the DebtBomb binary."""

from .errors import (
    BinaryMissing,
    BootstrapError,
    ChecksumMismatch,
    DownloadFailed,
    FilesystemError,
    SpawnFailed,
    UnsupportedArchitecture,
    UnsupportedPlatform,
)
from .launcher import SignalRelay, binary_path, run, spawn_and_wait
from .resolver import (
    ArtifactDescriptor,
    PlatformTarget,
    describe_artifact,
    host_target,
    local_binary_name,
    resolve_target,
)
from .service import InstallResult, build_download_url, install_binary

__all__ = [
    "ArtifactDescriptor",
    "BinaryMissing",
    "BootstrapError",
    "ChecksumMismatch",
    "DownloadFailed",
    "FilesystemError",
    "InstallResult",
    "PlatformTarget",
    "SignalRelay",
    "SpawnFailed",
    "UnsupportedArchitecture",
    "UnsupportedPlatform",
    "binary_path",
    "build_download_url",
    "describe_artifact",
    "host_target",
    "install_binary",
    "local_binary_name",
    "resolve_target",
    "run",
    "spawn_and_wait",
]
