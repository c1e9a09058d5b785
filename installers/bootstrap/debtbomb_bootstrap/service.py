"""Release download and atomic local install of the platform binary."""

from __future__ import annotations

import contextlib
import hashlib
import http.client
import os
import ssl
import tempfile
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import certifi

from debtbomb_core import BootstrapConfig, get_logger
from debtbomb_core import install_dir as default_install_dir

from .errors import ChecksumMismatch, DownloadFailed, FilesystemError
from .resolver import ArtifactDescriptor, PlatformTarget, describe_artifact, host_target


ProgressCallback = Callable[[str], None]

REDIRECT_STATUSES = (301, 302)
EXECUTABLE_MODE = 0o755
_CHUNK_SIZE = 1024 * 1024


class _NoRedirect(urllib.request.HTTPRedirectHandler):
    """Hand 3xx responses back to the caller instead of following them."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        return None


def _build_ssl_context() -> ssl.SSLContext:
    return ssl.create_default_context(cafile=certifi.where())


def _open(url: str, timeout: int):
    """Issue one GET. Error statuses come back as the response, not raised."""
    opener = urllib.request.build_opener(
        _NoRedirect(),
        urllib.request.HTTPSHandler(context=_build_ssl_context()),
    )
    request = urllib.request.Request(
        url,
        headers={
            "User-Agent": "DebtBombInstaller/1 (+https://github.com/jobin-404/debtbomb)",
            "Accept": "application/octet-stream",
        },
    )
    try:
        return opener.open(request, timeout=timeout)
    except urllib.error.HTTPError as exc:
        return exc


def release_asset_url(config: BootstrapConfig, asset_name: str) -> str:
    tag = config.version if config.version.startswith("v") else f"v{config.version}"
    return f"https://{config.host}/{config.repo}/releases/download/{tag}/{asset_name}"


def build_download_url(config: BootstrapConfig, artifact: ArtifactDescriptor) -> str:
    return release_asset_url(config, artifact.remote_name)


def open_following_redirects(url: str, max_redirects: int, timeout: int):
    """Return the open 2xx response for ``url``, following at most ``max_redirects`` hops."""
    logger = get_logger()
    current = url
    for hop in range(max_redirects + 1):
        try:
            response = _open(current, timeout)
        except urllib.error.URLError as exc:
            raise DownloadFailed(current, str(exc.reason)) from exc
        except (OSError, http.client.HTTPException) as exc:
            raise DownloadFailed(current, str(exc)) from exc

        status = response.status
        if status in REDIRECT_STATUSES:
            location = response.headers.get("Location")
            response.close()
            if not location:
                raise DownloadFailed(current, "redirect without Location header", status=status)
            current = urllib.parse.urljoin(current, location)
            logger.info(f"redirect {hop + 1} -> {current}", extra={"event": "download_redirect"})
            continue

        if not 200 <= status < 300:
            reason = response.reason or "unexpected response"
            response.close()
            raise DownloadFailed(current, reason, status=status)

        return response

    raise DownloadFailed(url, f"too many redirects (limit {max_redirects})")


def parse_checksums(text: str) -> dict[str, str]:
    out: dict[str, str] = {}
    for line in text.splitlines():
        parts = line.strip().split()
        if len(parts) >= 2:
            out[parts[1].lstrip("*")] = parts[0]
    return out


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def fetch_checksums(config: BootstrapConfig) -> dict[str, str] | None:
    """Checksums published with the release, or None when the release has none."""
    url = release_asset_url(config, config.checksums_asset)
    try:
        response = open_following_redirects(url, config.max_redirects, config.timeout_s)
    except DownloadFailed as exc:
        if exc.status == 404:
            return None
        raise

    try:
        text = response.read().decode("utf-8", errors="replace")
    except (OSError, http.client.HTTPException) as exc:
        raise DownloadFailed(url, str(exc)) from exc
    finally:
        response.close()
    return parse_checksums(text)


def _stream(response, fh, url: str, dest: Path) -> None:
    while True:
        try:
            chunk = response.read(_CHUNK_SIZE)
        except (OSError, http.client.HTTPException) as exc:
            raise DownloadFailed(url, f"connection lost: {exc}") from exc
        if not chunk:
            break
        try:
            fh.write(chunk)
        except OSError as exc:
            raise FilesystemError(dest, exc.strerror or str(exc)) from exc


def _make_executable(path: Path) -> None:
    path.chmod(EXECUTABLE_MODE)


@dataclass(frozen=True)
class InstallResult:
    target: PlatformTarget
    artifact: ArtifactDescriptor
    url: str
    path: Path
    checksum_verified: bool


def install_binary(
    config: BootstrapConfig,
    install_dir: Path | None = None,
    target: PlatformTarget | None = None,
    progress: ProgressCallback | None = None,
) -> InstallResult:
    """Download the release binary for ``target`` and install it at the canonical path.

    The body lands in a temporary file beside the destination and is renamed
    into place only once it is complete, verified and permissioned. Any failure
    removes the temporary file and leaves a previous install untouched.
    """
    progress = progress or (lambda _msg: None)
    logger = get_logger()

    target = target or host_target()
    artifact = describe_artifact(target, config.tool)
    url = build_download_url(config, artifact)
    destination_dir = install_dir or default_install_dir()
    dest = destination_dir / artifact.local_name

    progress(f"Downloading {config.tool} binary from {url}...")
    try:
        destination_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{artifact.local_name}-", suffix=".part", dir=destination_dir)
    except OSError as exc:
        raise FilesystemError(destination_dir, exc.strerror or str(exc)) from exc
    tmp_path = Path(tmp_name)

    verified = False
    try:
        with os.fdopen(fd, "wb") as fh:
            response = open_following_redirects(url, config.max_redirects, config.timeout_s)
            try:
                _stream(response, fh, url, dest)
            finally:
                response.close()
            try:
                fh.flush()
                os.fsync(fh.fileno())
            except OSError as exc:
                raise FilesystemError(dest, exc.strerror or str(exc)) from exc

        if config.verify_checksums:
            progress("Verifying checksum")
            checksums = fetch_checksums(config)
            expected = (checksums or {}).get(artifact.remote_name)
            if expected is None:
                logger.warning(
                    f"no published checksum for {artifact.remote_name}; skipping verification",
                    extra={"event": "checksum_unavailable"},
                )
            else:
                actual = sha256_file(tmp_path)
                if actual.lower() != expected.lower():
                    raise ChecksumMismatch(url, expected, actual)
                verified = True

        try:
            if not artifact.is_windows:
                _make_executable(tmp_path)
            os.replace(tmp_path, dest)
        except OSError as exc:
            raise FilesystemError(dest, exc.strerror or str(exc)) from exc
    except BaseException:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise

    logger.info(f"installed {artifact.remote_name} at {dest}", extra={"event": "install_complete"})
    progress("Download complete")
    return InstallResult(
        target=target,
        artifact=artifact,
        url=url,
        path=dest,
        checksum_verified=verified,
    )
