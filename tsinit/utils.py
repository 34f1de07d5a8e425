"""Shared utility functions for tsinit.

Provides blocking command execution, JSON I/O, the directory primitives the
generators are built on (create-or-clear, recursive listing, recursive
deletion), and Rich-based progress reporting.
"""

from __future__ import annotations

import json
import os
import subprocess
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Command execution
# ---------------------------------------------------------------------------


def run_command(
    cmd: str | list[str],
    cwd: str | Path | None = None,
    timeout: int = 120,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command and wait for it to finish.

    Args:
        cmd: Shell command string or list of arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A timeout is reported as
        returncode ``-1`` with an explanatory stderr.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    try:
        completed = subprocess.run(
            cmd,
            shell=isinstance(cmd, str),
            cwd=str(cwd) if cwd else None,
            env=merged_env,
            capture_output=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return (
            -1,
            "",
            f"Command timed out after {timeout}s: {cmd if isinstance(cmd, str) else ' '.join(cmd)}",
        )

    stdout_str = (completed.stdout or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (completed.stderr or b"").decode("utf-8", errors="replace").strip()
    return (completed.returncode, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        return {"_root": data}
    return data


def dump_json(data: dict[str, Any] | list[Any], indent: int = 4) -> str:
    """Serialise *data* the way every generated JSON file is written."""
    return json.dumps(data, indent=indent, ensure_ascii=False)


def save_json(data: dict[str, Any] | list[Any], path: str | Path, indent: int = 4) -> Path:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically.

    Returns:
        The path that was written.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(dump_json(data, indent), encoding="utf-8")
    return file_path


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def list_files(
    path: str | Path,
    relative: bool = True,
    suffixes: list[str] | tuple[str, ...] = (),
) -> list[str]:
    """List every file below *path*, descending into sub-directories.

    Args:
        path: File or directory to scan.  A missing path yields ``[]``.
        relative: Return paths relative to *path* (POSIX separators) instead
            of absolute-ish joined paths.
        suffixes: Extensions without the dot (``["ts", "json"]``).  When
            empty every file is returned.

    Returns:
        Sorted list of file paths.
    """
    root = Path(path)
    if not root.exists():
        return []

    wanted = {s.lstrip(".") for s in suffixes}

    def _keep(p: Path) -> bool:
        return not wanted or p.suffix.lstrip(".") in wanted

    if not root.is_dir():
        if not _keep(root):
            return []
        return [root.name if relative else str(root)]

    found = sorted(
        (p for p in root.rglob("*") if p.is_file() and _keep(p)),
        key=lambda p: p.relative_to(root).as_posix(),
    )
    if relative:
        return [p.relative_to(root).as_posix() for p in found]
    return [str(p) for p in found]


def delete_tree(path: str | Path, include_root: bool = False) -> None:
    """Recursively delete the contents of *path*.

    A plain file is unlinked.  For a directory every child is removed and,
    when *include_root* is set, the directory itself as well.  A missing
    path is ignored.
    """
    target = Path(path)
    if not target.exists() and not target.is_symlink():
        return
    if target.is_symlink() or not target.is_dir():
        target.unlink()
        return

    for child in target.iterdir():
        if child.is_dir() and not child.is_symlink():
            delete_tree(child, include_root=True)
        else:
            child.unlink()

    if include_root:
        target.rmdir()


def create_or_clear(path: str | Path, quiet: bool = False) -> Path:
    """Make *path* an empty directory.

    Creates it (with parents) when absent, otherwise deletes everything
    inside it while keeping the directory itself.

    Raises:
        NotADirectoryError: If *path* exists but is not a directory.  Nothing
            is deleted in that case.
    """
    dir_path = Path(path)
    if not dir_path.exists():
        dir_path.mkdir(parents=True, exist_ok=True)
        if not quiet:
            console.print(f"[dim]init target path {escape(str(dir_path))}[/dim]")
        return dir_path

    if not dir_path.is_dir():
        raise NotADirectoryError(f"{dir_path} exists and is not a directory")

    delete_tree(dir_path)
    if not quiet:
        console.print(f"[dim]clear target path {escape(str(dir_path))}[/dim]")
    return dir_path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_stage_header(index: int, name: str) -> None:
    """Print a stage header rule, e.g. ``Stage 2: WRITE MANIFEST``."""
    console.print(
        Rule(
            f"[bold bright_cyan] Stage {index}: {name.upper()} [/bold bright_cyan]",
            style="bright_cyan",
        )
    )


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
