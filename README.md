# rosenpass

Support code for a post-quantum key exchange whose output key is handed to
WireGuard as a pre-shared key. The package has no third-party dependencies.

## Modules

- `rosenpass.constant_time` – `xor(src, dst)` returns `dst` XOR-ed with
  `src`; operands of different lengths raise `ValueError`.
- `rosenpass.kem` – the key encapsulation interface. `Kem` is an abstract
  base class with `keygen()`, `encaps(pk)` and `decaps(sk, ct)`; subclasses
  set `lengths` (a `KemLengths` with `sk`, `pk`, `ct` and `shk`) and implement
  `_keygen`, `_encaps` and `_decaps`. Every input and output is checked
  against the lengths and a mismatch raises `ValueError`.
  `EPHEMERAL_KEM_LENGTHS` (Kyber-512) and `STATIC_KEM_LENGTHS`
  (Classic McEliece 460896) give the sizes of the two schemes the protocol uses.
- `rosenpass.lenses` – named, fixed-size views onto byte buffers.
  `LenseLayout(name, fields)` describes the fields; `view(buf)` requires an
  exact fit, `view_truncating(buf)` accepts longer buffers. A `LenseView`
  offers `get`, `set` (also as `view[name]`), `until` and `all_bytes`. Size
  problems raise `LenseError`.
- `rosenpass.endpoint` – peer endpoints. `SocketBoundAddress` pairs an
  address with the index of the socket that reaches it;
  `HostPathDiscoveryEndpoint` tries socket/address combinations round robin
  (`from_addresses`, `lookup("HOST:PORT")`, `send_scouting`) and raises
  `ScoutingError` when every attempt fails. `discovery_from_multiple_sources`
  merges the addresses of two endpoints without duplicates.
  `ipv4_any_binding()` and `ipv6_any_binding()` return the wildcard addresses.
  Sockets are any objects with a `sendto(data, address)` method.
- `rosenpass.peers` – `AppPeer` (output file, `WireguardOut` target, initial
  and current endpoint), `KeyOutputReason` (`EXCHANGED`, `STALE`) and
  `output_key(peer, why, key, peer_id, verbose=False)`, which writes the
  base64 encoded key to the peer's output file, prints an
  `output-key peer <id> key-file "<path>" <reason>` line on standard output,
  and pipes the key to `wg set <dev> peer <pk> preshared-key /dev/stdin`.
- `rosenpass.manpage` – `render_man(compiler, man)` renders a troff page to
  ASCII; `generate_man(man)` tries `mandoc`, then `groff`, and falls back to
  `FALLBACK_TEXT`.
- `rosenpass.cli` – `parse_keygen_args(args)` reads
  `private-key <PATH>` (or `secret-key <PATH>`) and `public-key <PATH>`
  pairs into `KeyPaths`; `check_key_targets(public_key, secret_key, force)`
  refuses to overwrite existing key files unless `force` is set. Both raise
  `CliError`.

## Examples

```python
from rosenpass.constant_time import xor

assert xor(b"world", b"hello") == b"\x1f\n\x1e\x00\x0b"
```

```python
from rosenpass.lenses import LenseLayout

udp_header = LenseLayout(
    "UdpDatagramHeader",
    {"source_port": 2, "dest_port": 2, "length": 2, "checksum": 2},
)
buf = bytearray(8)
view = udp_header.view(buf)
view.set("source_port", (53).to_bytes(2, "big"))
assert buf == bytearray([0, 53, 0, 0, 0, 0, 0, 0])
```

```python
from rosenpass.endpoint import HostPathDiscoveryEndpoint, discovery_from_multiple_sources

a = HostPathDiscoveryEndpoint.from_addresses([("192.0.2.1", 9999)])
b = HostPathDiscoveryEndpoint.from_addresses([("192.0.2.1", 9999), ("192.0.2.2", 9999)])
merged = discovery_from_multiple_sources(a, b)
assert merged.addresses() == [("192.0.2.1", 9999), ("192.0.2.2", 9999)]
```

## What the package does not do

It has no keyed hashing, no authenticated encryption, no hash-domain key
derivation and no wire message definitions, and it ships no concrete KEM:
`Kem` must be subclassed with an implementation. There is no handshake state
machine, no UDP server loop and no command to run; `rosenpass.cli` only
parses and checks arguments for key generation.