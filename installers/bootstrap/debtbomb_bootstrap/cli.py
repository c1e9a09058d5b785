"""Console entry points: one-shot installer and the per-invocation launcher."""

from __future__ import annotations

import argparse
import sys

from debtbomb_core import configure_logging, get_logger, load_config

from .errors import BootstrapError
from .launcher import run
from .service import install_binary


def build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="debtbomb-install",
        description="Download the DebtBomb binary for this platform from its GitHub release",
    )


def install_main(argv: list[str] | None = None) -> int:
    build_parser().parse_args(argv)
    configure_logging(console=True)
    logger = get_logger()
    config = load_config()

    try:
        result = install_binary(config, progress=print)
    except BootstrapError as exc:
        logger.error(str(exc), exc_info=True, extra={"event": "install_failed", "file_only": True})
        print(f"Error downloading DebtBomb binary: {exc}", file=sys.stderr)
        print(
            "Please ensure you have an active internet connection and that the release exists.",
            file=sys.stderr,
        )
        return exc.exit_code

    print(f"DebtBomb binary downloaded successfully to {result.path}.")
    return 0


def launch_main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    configure_logging(console=False)
    logger = get_logger()

    try:
        return run(args, load_config())
    except BootstrapError as exc:
        logger.error(str(exc), extra={"event": "launch_failed"})
        print(f"debtbomb: {exc}", file=sys.stderr)
        return exc.exit_code


if __name__ == "__main__":
    raise SystemExit(launch_main())
