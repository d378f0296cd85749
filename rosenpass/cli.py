"""Command line argument handling for key generation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import NamedTuple, Optional, Union

__all__ = ["CliError", "KeyPaths", "parse_keygen_args", "check_key_targets"]

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


class CliError(ValueError):
    """The command line or its targets are not usable."""


class KeyPaths(NamedTuple):
    """Destinations of a static key pair."""

    secret_key: Path
    public_key: Path


def _quote_path(path: PathLike) -> str:
    text = str(path).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def parse_keygen_args(args: Iterable[str]) -> KeyPaths:
    """Parse the legacy ``keygen`` arguments.

    The arguments come in pairs: ``private-key <PATH>`` (also accepted as
    ``secret-key``) and ``public-key <PATH>``. Both keys are required.
    Raises :class:`CliError` on unknown or incomplete options.
    """
    log.warning(
        "The 'keygen' command is deprecated. Please use the 'gen-keys' command instead."
    )
    secret_key: Optional[Path] = None
    public_key: Optional[Path] = None

    it = iter(args)
    for flag in it:
        value = next(it, None)
        if value is not None and flag in ("private-key", "secret-key"):
            secret_key = Path(value)
        elif value is not None and flag == "public-key":
            public_key = Path(value)
        else:
            raise CliError(f"Unknown option `{flag}`")

    if secret_key is None:
        raise CliError("private-key is required")
    if public_key is None:
        raise CliError("public-key is required")
    return KeyPaths(secret_key=secret_key, public_key=public_key)


def check_key_targets(
    public_key: PathLike, secret_key: PathLike, force: bool = False
) -> KeyPaths:
    """Make sure key generation will not overwrite existing key files.

    Unless ``force`` is set, an existing regular file at either path is an
    error; all problems are reported together in one :class:`CliError`.
    Returns the checked paths.
    """
    pkf, skf = Path(public_key), Path(secret_key)
    problems = []
    if not force and pkf.is_file():
        problems.append(
            f"public-key file {_quote_path(pkf)} exist, refusing to overwrite it"
        )
    if not force and skf.is_file():
        problems.append(
            f"secret-key file {_quote_path(skf)} exist, refusing to overwrite it"
        )
    if problems:
        raise CliError("\n".join(problems))
    return KeyPaths(secret_key=skf, public_key=pkf)