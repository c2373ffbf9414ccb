"""Command line helpers for dddkit."""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .app import DomainApp
from .config import DddKitConfig
from .diagnostics.checklist import run_checklist as checklist_run

console = Console()


def run_checklist(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="dddkit wiring checks")
    parser.add_argument("module", help="Python module with register(app) function")
    args = parser.parse_args(argv)

    config = DddKitConfig.from_env()
    app = DomainApp(config)
    _load_module(args.module, app)

    issues = checklist_run(app)
    if not issues:
        console.print("[bold green]No issues found.[/bold green]")
        return
    for issue in issues:
        style = "red" if issue.severity == "error" else "yellow"
        label = escape(f"[{issue.severity.upper()}]")
        console.print(f"[{style}]{label}[/{style}] {escape(issue.message)}")
    if any(issue.severity == "error" for issue in issues):
        sys.exit(1)


def _load_module(path: str, app: DomainApp) -> None:
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    module = importlib.import_module(path)
    if hasattr(module, "register"):
        module.register(app)
    else:
        raise RuntimeError(f"Module {path} has no register(app) function.")
