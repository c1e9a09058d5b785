"""Transparent proxy to the installed binary: arguments, streams, exit code and signals."""

from __future__ import annotations

import os
import signal
import subprocess
from pathlib import Path
from typing import Sequence

from debtbomb_core import BootstrapConfig, get_logger
from debtbomb_core import install_dir as default_install_dir

from .errors import BinaryMissing, SpawnFailed
from .resolver import PlatformTarget, host_target, local_binary_name


RELAYED_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM", "SIGHUP") if hasattr(signal, name)
)


class SignalRelay:
    """Forward termination signals received by this process to the child.

    Enter the relay before spawning so no signal can take the default action
    while the child starts. Signals that arrive before ``attach`` are held and
    relayed once the child exists. Previous handlers are restored on exit,
    so the relay lives exactly as long as the child is being waited on.
    Must be entered from the main thread.
    """

    def __init__(self, child: subprocess.Popen | None = None, signals: Sequence[int] = RELAYED_SIGNALS) -> None:
        self.child = child
        self.signals = tuple(signals)
        self.pending: list[int] = []
        self._previous: dict[int, object] = {}

    def attach(self, child: subprocess.Popen) -> None:
        self.child = child
        pending, self.pending = self.pending, []
        for signum in pending:
            self._forward(signum)

    def _relay(self, signum: int, _frame) -> None:
        if self.child is None:
            self.pending.append(signum)
            return
        self._forward(signum)

    def _forward(self, signum: int) -> None:
        if self.child.poll() is not None:
            return
        if os.name == "nt" and signum == signal.SIGINT:
            # The console already delivers Ctrl-C to every process attached to it.
            return
        get_logger().info(f"relaying signal {signum} to pid {self.child.pid}", extra={"event": "signal_relay"})
        try:
            self.child.send_signal(signum)
        except ProcessLookupError:
            get_logger().info("child exited before signal delivery", extra={"event": "signal_relay_missed"})

    def __enter__(self) -> "SignalRelay":
        for signum in self.signals:
            self._previous[signum] = signal.signal(signum, self._relay)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        for signum, handler in self._previous.items():
            # None means the previous handler was installed outside Python.
            signal.signal(signum, signal.SIG_DFL if handler is None else handler)
        self._previous.clear()


def binary_path(
    config: BootstrapConfig,
    install_dir: Path | None = None,
    target: PlatformTarget | None = None,
) -> Path:
    target = target or host_target()
    return (install_dir or default_install_dir()) / local_binary_name(target, config.tool)


def spawn_and_wait(command: Sequence[str]) -> int:
    """Run ``command`` with inherited stdio and return the exit status to mirror."""
    logger = get_logger()
    with SignalRelay() as relay:
        try:
            child = subprocess.Popen(list(command))
        except (OSError, ValueError) as exc:
            raise SpawnFailed(command, getattr(exc, "strerror", None) or str(exc)) from exc
        relay.attach(child)
        returncode = child.wait()

    if returncode < 0:
        logger.warning(
            f"child terminated by signal {-returncode}; exiting with status 1",
            extra={"event": "abnormal_child_exit"},
        )
        return 1
    return returncode


def run(
    args: Sequence[str],
    config: BootstrapConfig,
    install_dir: Path | None = None,
    target: PlatformTarget | None = None,
) -> int:
    path = binary_path(config, install_dir=install_dir, target=target)
    if not path.is_file():
        raise BinaryMissing(path)
    return spawn_and_wait([str(path), *args])
