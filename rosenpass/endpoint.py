"""Peer endpoints and host-path discovery.

When the daemon starts it knows either nothing about a peer's address or a
host name. A host name may resolve to several addresses, and only some of
the open sockets may be able to reach them. :class:`HostPathDiscoveryEndpoint`
therefore tries socket/address combinations round robin, continuing after
the last combination that worked. Once a peer has answered, its address
and the socket that reached it are known and kept as a
:class:`SocketBoundAddress`.

Addresses are socket address tuples as the :mod:`socket` module uses them:
``(host, port)`` for IPv4 and ``(host, port, flowinfo, scope_id)`` for IPv6.
Sockets are any objects with a ``sendto(data, address)`` method.
"""

from __future__ import annotations

import errno
import logging
import socket
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from itertools import cycle, islice
from typing import Any, Optional, Protocol, Union

__all__ = [
    "SocketAddress",
    "DatagramSender",
    "ScoutingError",
    "SocketBoundAddress",
    "HostPathDiscoveryEndpoint",
    "Endpoint",
    "discovery_from_multiple_sources",
    "ipv4_any_binding",
    "ipv6_any_binding",
]

log = logging.getLogger(__name__)

SocketAddress = tuple
"""A socket address tuple: ``(host, port)`` or ``(host, port, flowinfo, scope_id)``."""


class DatagramSender(Protocol):
    """Anything that can send a datagram to an address."""

    def sendto(self, data: bytes, address: Any) -> int: ...


class ScoutingError(OSError):
    """No socket could send a message to any candidate address."""


def ipv4_any_binding() -> SocketAddress:
    """The IPv4 wildcard address with an arbitrary port."""
    return ("0.0.0.0", 0)


def ipv6_any_binding() -> SocketAddress:
    """The IPv6 wildcard address with an arbitrary port."""
    return ("::", 0, 0, 0)


@dataclass
class SocketBoundAddress:
    """An address together with the index of the socket that reaches it."""

    socket: int
    addr: SocketAddress

    def addresses(self) -> list[SocketAddress]:
        """The single address of this endpoint."""
        return [self.addr]

    def send(self, sockets: Sequence[DatagramSender], buf: bytes) -> None:
        """Send ``buf`` to the address through the bound socket."""
        sockets[self.socket].sendto(bytes(buf), self.addr)


def _split_host_port(hostname: str) -> tuple[str, int]:
    host, sep, port_text = hostname.rpartition(":")
    if not sep or not host:
        raise ValueError(f"invalid socket address {hostname!r}: expected HOST:PORT")
    if not port_text.isdigit() or int(port_text) > 0xFFFF:
        raise ValueError(f"invalid port value in {hostname!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, int(port_text)


def _ignorable(err: OSError) -> bool:
    if err.errno == errno.EAFNOSUPPORT:
        return True
    return (err.strerror or str(err)).startswith(
        "Address family not supported by protocol"
    )


@dataclass
class HostPathDiscoveryEndpoint:
    """Candidate addresses for a peer, tried round robin over all sockets."""

    _addresses: list[SocketAddress]
    _scouting_state: tuple[int, int] = field(default=(0, 0), repr=False)

    @staticmethod
    def from_addresses(addresses: Iterable[SocketAddress]) -> HostPathDiscoveryEndpoint:
        """Start discovery from a list of addresses."""
        return HostPathDiscoveryEndpoint(list(addresses))

    @staticmethod
    def lookup(hostname: str) -> HostPathDiscoveryEndpoint:
        """Resolve ``HOST:PORT`` into its addresses.

        Raises ``ValueError`` for a malformed string and ``OSError`` when
        the host cannot be resolved.
        """
        host, port = _split_host_port(hostname)
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)
        return HostPathDiscoveryEndpoint([info[4] for info in infos])

    def addresses(self) -> list[SocketAddress]:
        """The candidate addresses, in order."""
        return self._addresses

    def _insert_next_scout_offset(
        self, sockets: Sequence[DatagramSender], addr_no: int, sock_no: int
    ) -> None:
        self._scouting_state = (
            (addr_no + 1) % len(self._addresses),
            (sock_no + 1) % len(sockets),
        )

    def send_scouting(self, sockets: Sequence[DatagramSender], buf: bytes) -> None:
        """Try to reach the host, continuing after the last working combination.

        Raises :class:`ScoutingError` if every attempt fails.
        """
        addr_off, sock_off = self._scouting_state
        data = bytes(buf)
        addrs = islice(
            cycle(enumerate(self._addresses)), addr_off, addr_off + len(self._addresses)
        )
        # One socket iterator is shared by all addresses: once every socket
        # has been tried, later addresses get no further attempts.
        socks = islice(cycle(enumerate(sockets)), sock_off, sock_off + len(sockets))

        for addr_no, addr in addrs:
            for sock_no, sock in socks:
                try:
                    sock.sendto(data, addr)
                except OSError as err:
                    if not _ignorable(err):
                        log.warning("Socket #%d refusing to send to %s: %s", sock_no, addr, err)
                    continue
                self._insert_next_scout_offset(sockets, addr_no, sock_no)
                return

        raise ScoutingError("Unable to send message: All sockets returned errors.")

    def send(self, sockets: Sequence[DatagramSender], buf: bytes) -> None:
        """Send ``buf`` by scouting for a working path."""
        self.send_scouting(sockets, buf)


Endpoint = Union[SocketBoundAddress, HostPathDiscoveryEndpoint]


def discovery_from_multiple_sources(
    a: Optional[Endpoint], b: Optional[Endpoint]
) -> Optional[HostPathDiscoveryEndpoint]:
    """Restart discovery from the addresses of both endpoints, without duplicates.

    Returns ``None`` when neither endpoint is given.
    """
    sources = [e for e in (a, b) if e is not None]
    if not sources:
        return None
    merged = dict.fromkeys(addr for e in sources for addr in e.addresses())
    return HostPathDiscoveryEndpoint.from_addresses(merged)