from __future__ import annotations

import runpy
from pathlib import Path

import debtbomb_bootstrap.__main__ as launcher_main


def test_main_passes_through_args(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(launcher_main, "launch_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = launcher_main.main(["scan", "--format", "json"])
    assert rc == 0
    assert calls == [["scan", "--format", "json"]]


def test_main_returns_child_status(monkeypatch) -> None:
    monkeypatch.setattr(launcher_main, "launch_main", lambda argv=None: 7)
    assert launcher_main.main([]) == 7


def test_main_module_runpath_without_package_context() -> None:
    main_path = (
        Path(__file__).resolve().parents[1]
        / "installers"
        / "bootstrap"
        / "debtbomb_bootstrap"
        / "__main__.py"
    )
    result = runpy.run_path(str(main_path))
    assert "main" in result
