from __future__ import annotations

try:
    # Normal package import path.
    from .cli import launch_main
except ImportError:
    # Script/frozen entrypoint path.
    from debtbomb_bootstrap.cli import launch_main


def main(argv: list[str] | None = None) -> int:
    return int(launch_main(argv))


if __name__ == "__main__":
    raise SystemExit(main())
