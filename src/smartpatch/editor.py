"""Editor highlighting adapter.

Opens the patched file in VS Code at the end of the inserted text and asks
the smartpatch highlighter extension to select the inserted range. This
runs after the patch is written and never affects matching or splicing;
failures are logged, not raised.
"""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from urllib.parse import quote

from smartpatch.location import SourceLocation
from smartpatch.utils.logger import get_logger

logger = get_logger(__name__)

HIGHLIGHT_URI_BASE = "vscode://DK.vscode-smartpatch-highlighter"

Runner = Callable[[Sequence[str]], object]


def goto_command(path: str | Path, inserted: SourceLocation) -> list[str]:
    """``code --goto file:line:col`` placing the cursor after the insertion."""
    line = inserted.end_lineno or inserted.lineno
    col = inserted.end_col_offset or inserted.col_offset
    return ["code", "--goto", f"{Path(path).resolve()}:{line}:{col}"]


def highlight_uri(path: str | Path, inserted: SourceLocation) -> str:
    """URI asking the highlighter extension to select the inserted range.

    The extension expects 0-indexed lines and columns.
    """
    end_line = inserted.end_lineno or inserted.lineno
    end_col = inserted.end_col_offset or inserted.col_offset
    encoded = quote(str(Path(path).resolve()), safe="")
    return (
        f"{HIGHLIGHT_URI_BASE}?path={encoded}"
        f"&startLine={inserted.lineno - 1}&startCol={inserted.col_offset - 1}"
        f"&endLine={end_line - 1}&endCol={end_col - 1}"
    )


def open_uri_command(uri: str, platform: str | None = None) -> list[str]:
    """OS-specific command that hands a URI to its registered handler.

    Windows bypasses ``cmd /c start``: cmd.exe splits an unquoted URI at
    each ``&`` and the range parameters never reach the extension.
    """
    platform = platform or sys.platform
    if platform == "win32":
        return ["rundll32", "url.dll,FileProtocolHandler", uri]
    if platform == "darwin":
        return ["open", uri]
    return ["xdg-open", uri]


def _run(command: Sequence[str]) -> object:
    return subprocess.run(command, check=True)


def open_in_editor(
    path: str | Path,
    inserted: SourceLocation,
    *,
    runner: Runner = _run,
    platform: str | None = None,
) -> bool:
    """Open the file and highlight the inserted range.

    Args:
        path: Patched file
        inserted: Span of the replacement in the patched file
        runner: Executes a command (injectable for tests)
        platform: Overrides sys.platform

    Returns:
        True if both commands ran, False if either failed.
    """
    commands = [
        goto_command(path, inserted),
        open_uri_command(highlight_uri(path, inserted), platform),
    ]
    for command in commands:
        try:
            runner(command)
        except (OSError, subprocess.CalledProcessError) as e:
            logger.warning("Editor command %r failed: %s", command[0], e)
            return False
    return True
