"""Host platform resolution to release artifact names."""

from __future__ import annotations

import platform
from dataclasses import dataclass

from .errors import UnsupportedArchitecture, UnsupportedPlatform


_OS_NAMES = {
    "darwin": "darwin",
    "linux": "linux",
    "windows": "windows",
    "win32": "windows",
}

_ARCH_NAMES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "arm64": "arm64",
    "aarch64": "arm64",
}

SUPPORTED_PLATFORMS: tuple[tuple[str, str], ...] = (
    ("darwin", "amd64"),
    ("darwin", "arm64"),
    ("linux", "amd64"),
    ("linux", "arm64"),
    ("windows", "amd64"),
    ("windows", "arm64"),
)


@dataclass(frozen=True)
class PlatformTarget:
    os_name: str
    arch: str

    @property
    def is_windows(self) -> bool:
        return self.os_name == "windows"


@dataclass(frozen=True)
class ArtifactDescriptor:
    remote_name: str
    local_name: str
    is_windows: bool


def resolve_target(system: str, machine: str) -> PlatformTarget:
    os_name = _OS_NAMES.get(system.strip().lower())
    if os_name is None:
        raise UnsupportedPlatform(system)
    arch = _ARCH_NAMES.get(machine.strip().lower())
    if arch is None:
        raise UnsupportedArchitecture(machine)
    return PlatformTarget(os_name=os_name, arch=arch)


def host_target() -> PlatformTarget:
    return resolve_target(platform.system(), platform.machine())


def local_binary_name(target: PlatformTarget, tool: str) -> str:
    """Canonical on-disk name; depends on the operating system only.

    Example: local_binary_name(PlatformTarget("linux", "arm64"), "debtbomb")
             -> "debtbomb-bin"
    """
    return f"{tool}.exe" if target.is_windows else f"{tool}-bin"


def describe_artifact(target: PlatformTarget, tool: str) -> ArtifactDescriptor:
    """Release asset and local file names for ``target``.

    Example: describe_artifact(PlatformTarget("windows", "amd64"), "debtbomb")
             -> remote "debtbomb-windows-amd64.exe", local "debtbomb.exe"
    """
    extension = ".exe" if target.is_windows else ""
    return ArtifactDescriptor(
        remote_name=f"{tool}-{target.os_name}-{target.arch}{extension}",
        local_name=local_binary_name(target, tool),
        is_windows=target.is_windows,
    )
