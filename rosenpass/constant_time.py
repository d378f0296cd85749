"""Byte-wise helpers for secret data."""

from __future__ import annotations


def xor(src: bytes, dst: bytes) -> bytes:
    """Return ``dst`` xored with ``src``.

    Both inputs must be the same length; a mismatch raises ``ValueError``.
    """
    if len(src) != len(dst):
        raise ValueError(
            f"xor operands differ in length: {len(src)} != {len(dst)}"
        )
    return bytes(d ^ s for d, s in zip(dst, src))