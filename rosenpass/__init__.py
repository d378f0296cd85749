"""Support code for a post-quantum key exchange: KEM interface, byte lenses, endpoints and key output."""

__version__ = "0.1.0"