"""Rendering of the manual page to plain text."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Union

__all__ = ["ManpageError", "render_man", "generate_man", "FALLBACK_TEXT"]

FALLBACK_TEXT = "Cannot render manual page\n"
_COMPILERS = ("mandoc", "groff")


class ManpageError(RuntimeError):
    """A troff compiler failed to render the manual page."""


def render_man(compiler: str, man: Union[str, Path]) -> str:
    """Render the troff page ``man`` to ASCII text with ``compiler``.

    Raises ``OSError`` if the compiler cannot be started, :class:`ManpageError`
    if it exits unsuccessfully and ``UnicodeDecodeError`` on non-UTF-8 output.
    """
    result = subprocess.run(
        [compiler, "-Tascii", str(man)],
        capture_output=True,
        check=False,
    )
    if result.returncode != 0:
        raise ManpageError(f"{compiler} returned an error")
    return result.stdout.decode("utf-8")


def generate_man(man: Union[str, Path] = "./doc/rosenpass.1") -> str:
    """Render ``man`` with the first compiler that works, else a fallback note."""
    for compiler in _COMPILERS:
        try:
            return render_man(compiler, man)
        except (OSError, ManpageError, UnicodeDecodeError):
            continue
    return FALLBACK_TEXT