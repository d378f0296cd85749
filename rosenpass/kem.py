"""Key encapsulation mechanisms.

A KEM offers three operations: key generation, encapsulation of a fresh
shared secret to a public key, and decapsulation of that secret with the
matching secret key. :class:`Kem` fixes this interface and enforces the
buffer sizes of a concrete scheme, given by its :class:`KemLengths`.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class KemLengths:
    """Byte lengths of the values a KEM handles."""

    sk: int
    pk: int
    ct: int
    shk: int


EPHEMERAL_KEM_LENGTHS = KemLengths(sk=1632, pk=800, ct=768, shk=32)
"""Kyber-512, used for ephemeral keys."""

STATIC_KEM_LENGTHS = KemLengths(sk=13568, pk=524160, ct=188, shk=32)
"""Classic McEliece 460896, used for static keys."""


def _require(name: str, value: bytes, expected: int) -> None:
    if len(value) != expected:
        raise ValueError(f"{name} must be {expected} bytes, got {len(value)}")


class Kem(abc.ABC):
    """Key encapsulation mechanism with checked buffer sizes.

    Subclasses set :attr:`lengths` and implement ``_keygen``, ``_encaps``
    and ``_decaps``; the public methods verify every input and output
    against those lengths.
    """

    lengths: ClassVar[KemLengths]

    def keygen(self) -> tuple[bytes, bytes]:
        """Generate a key pair; returns ``(sk, pk)``."""
        sk, pk = self._keygen()
        _require("secret key", sk, self.lengths.sk)
        _require("public key", pk, self.lengths.pk)
        return sk, pk

    def encaps(self, pk: bytes) -> tuple[bytes, bytes]:
        """Encapsulate to ``pk``; returns ``(shk, ct)``."""
        _require("public key", pk, self.lengths.pk)
        shk, ct = self._encaps(pk)
        _require("shared key", shk, self.lengths.shk)
        _require("ciphertext", ct, self.lengths.ct)
        return shk, ct

    def decaps(self, sk: bytes, ct: bytes) -> bytes:
        """Recover the shared key from ``ct`` using ``sk``."""
        _require("secret key", sk, self.lengths.sk)
        _require("ciphertext", ct, self.lengths.ct)
        shk = self._decaps(sk, ct)
        _require("shared key", shk, self.lengths.shk)
        return shk

    @abc.abstractmethod
    def _keygen(self) -> tuple[bytes, bytes]:
        """Produce ``(sk, pk)``."""

    @abc.abstractmethod
    def _encaps(self, pk: bytes) -> tuple[bytes, bytes]:
        """Produce ``(shk, ct)`` for ``pk``."""

    @abc.abstractmethod
    def _decaps(self, sk: bytes, ct: bytes) -> bytes:
        """Produce the shared key for ``ct`` under ``sk``."""