"""Application-side peer state and delivery of exchanged keys.

Once a key exchange with a peer completes, or an old key goes stale, the
key is handed out: written base64 encoded to the peer's output file, and
passed to WireGuard as the preshared key of the corresponding WireGuard
peer.
"""

from __future__ import annotations

import base64
import enum
import logging
import subprocess
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .endpoint import Endpoint

__all__ = ["WireguardOut", "AppPeer", "KeyOutputReason", "output_key"]

log = logging.getLogger(__name__)


@dataclass
class WireguardOut:
    """Where to install a key in WireGuard: device, peer and extra ``wg`` args."""

    dev: str = ""
    pk: str = ""
    extra_params: list[str] = field(default_factory=list)

    def command(self) -> list[str]:
        """The ``wg`` invocation that reads the key from standard input."""
        return [
            "wg",
            "set",
            self.dev,
            "peer",
            self.pk,
            "preshared-key",
            "/dev/stdin",
            *self.extra_params,
        ]


@dataclass
class AppPeer:
    """What the application knows about a peer beyond the protocol state."""

    outfile: Optional[Path] = None
    outwg: Optional[WireguardOut] = None
    initial_endpoint: Optional[Endpoint] = None
    current_endpoint: Optional[Endpoint] = None

    def endpoint(self) -> Optional[Endpoint]:
        """The endpoint in use, falling back to the configured one."""
        if self.current_endpoint is not None:
            return self.current_endpoint
        return self.initial_endpoint


class KeyOutputReason(enum.Enum):
    """Why a key is handed out."""

    EXCHANGED = "exchanged"
    STALE = "stale"

    @property
    def message(self) -> str:
        """Log message announcing the key output."""
        if self is KeyOutputReason.EXCHANGED:
            return "Exchanged key with peer"
        return "Erasing outdated key from peer"


def _b64(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def _quote_path(path: Union[str, Path]) -> str:
    text = str(path).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def _reap(child: subprocess.Popen) -> None:
    try:
        status = child.wait()
    except OSError as err:
        log.error("wait failed: %s", err)
        return
    if status == 0:
        log.debug("successfully passed psk to wg")
    else:
        log.error("could not pass psk to wg: exit status %s", status)


def output_key(
    peer: AppPeer,
    why: KeyOutputReason,
    key: bytes,
    peer_id: bytes,
    verbose: bool = False,
) -> None:
    """Hand ``key`` out as configured for ``peer``.

    Writes the base64 encoded key to the peer's output file and announces
    it on standard output, and pipes it to ``wg`` if a WireGuard target is
    configured. ``peer_id`` identifies the peer in messages.
    """
    peer_b64 = _b64(peer_id)
    if verbose:
        log.info("%s %s", why.message, peer_b64)

    if peer.outfile is not None:
        outfile = Path(peer.outfile)
        with outfile.open("w", encoding="ascii") as fh:
            fh.write(_b64(key))
        # Printed to stdout so that external tools can detect a completed exchange.
        print(
            f"output-key peer {peer_b64} key-file {_quote_path(outfile)} {why.value}",
            flush=True,
        )

    if peer.outwg is not None:
        child = subprocess.Popen(peer.outwg.command(), stdin=subprocess.PIPE)
        try:
            child.stdin.write(_b64(key).encode("ascii"))
        finally:
            child.stdin.close()
        threading.Thread(target=_reap, args=(child,), daemon=True).start()