"""Named, fixed-size views into byte buffers.

A :class:`LenseLayout` describes a sequence of named fields with fixed
lengths. Applying it to a buffer yields a :class:`LenseView` through which
fields are read and, on writable buffers, modified in place.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Union

Buffer = Union[bytes, bytearray, memoryview]

__all__ = ["LenseError", "LenseLayout", "LenseView"]


class LenseError(ValueError):
    """A buffer does not have the size a lense requires."""

    def __init__(self, message: str = "buffer size mismatch") -> None:
        super().__init__(message)

    @staticmethod
    def ensure_exact_buffer_size(length: int, required: int) -> None:
        """Raise unless ``length`` equals ``required``."""
        if length != required:
            raise LenseError(
                f"buffer size mismatch: got {length} bytes, need exactly {required}"
            )

    @staticmethod
    def ensure_sufficient_buffer_size(length: int, required: int) -> None:
        """Raise unless ``length`` is at least ``required``."""
        if length < required:
            raise LenseError(
                f"buffer size mismatch: got {length} bytes, need at least {required}"
            )


class LenseLayout:
    """An ordered set of named byte fields with fixed lengths."""

    __slots__ = ("name", "length", "_spans")

    def __init__(
        self,
        name: str,
        fields: Mapping[str, int] | Iterable[tuple[str, int]],
    ) -> None:
        items = fields.items() if isinstance(fields, Mapping) else fields
        spans: dict[str, tuple[int, int]] = {}
        position = 0
        for field_name, field_length in items:
            field_length = int(field_length)
            if field_length < 0:
                raise ValueError(f"field {field_name!r} has negative length")
            if field_name in spans:
                raise ValueError(f"duplicate field {field_name!r}")
            spans[field_name] = (position, field_length)
            position += field_length
        if not spans:
            raise ValueError("a lense needs at least one field")
        self.name = name
        self.length = position
        self._spans = spans

    @property
    def fields(self) -> tuple[str, ...]:
        """Field names in wire order."""
        return tuple(self._spans)

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        inner = ", ".join(f"{n}: {ln}" for n, (_, ln) in self._spans.items())
        return f"LenseLayout({self.name!r}, {{{inner}}})"

    def _span(self, name: str) -> tuple[int, int]:
        try:
            return self._spans[name]
        except KeyError:
            raise KeyError(f"{self.name} has no field {name!r}") from None

    def check_size(self, length: int) -> None:
        """Raise :class:`LenseError` unless ``length`` exactly fits the layout."""
        LenseError.ensure_exact_buffer_size(length, self.length)

    def field_len(self, name: str) -> int:
        """Size in bytes of the field ``name``."""
        return self._span(name)[1]

    def offset(self, name: str) -> int:
        """Position of the field ``name`` from the start of the layout."""
        return self._span(name)[0]

    def view(self, buf: Buffer) -> LenseView:
        """View ``buf``, which must be exactly as long as the layout."""
        self.check_size(len(memoryview(buf)))
        return LenseView(self, buf)

    def view_truncating(self, buf: Buffer) -> LenseView:
        """View the leading part of ``buf``, which may be longer than the layout."""
        mv = memoryview(buf)
        LenseError.ensure_sufficient_buffer_size(len(mv), self.length)
        return self.view(mv[: self.length])


class LenseView:
    """A layout applied to a buffer; writes go straight into the buffer."""

    __slots__ = ("layout", "_buf")

    def __init__(self, layout: LenseLayout, buf: Buffer) -> None:
        mv = memoryview(buf)
        LenseError.ensure_sufficient_buffer_size(len(mv), layout.length)
        self.layout = layout
        self._buf = mv

    @property
    def readonly(self) -> bool:
        return self._buf.readonly

    def get(self, name: str) -> bytes:
        """Return a copy of the field ``name``."""
        off, ln = self.layout._span(name)
        return bytes(self._buf[off : off + ln])

    def set(self, name: str, value: Buffer) -> None:
        """Overwrite the field ``name`` with ``value`` of the same length."""
        off, ln = self.layout._span(name)
        if self._buf.readonly:
            raise TypeError("cannot write through a read-only lense view")
        data = bytes(value)
        if len(data) != ln:
            raise LenseError(
                f"field {name!r} is {ln} bytes, value has {len(data)}"
            )
        self._buf[off : off + ln] = data

    __getitem__ = get
    __setitem__ = set

    def until(self, name: str) -> bytes:
        """Return the bytes preceding the field ``name``."""
        off, _ = self.layout._span(name)
        return bytes(self._buf[:off])

    def all_bytes(self) -> bytes:
        """Return every byte covered by the layout."""
        return bytes(self._buf[: self.layout.length])

    def __repr__(self) -> str:
        return f"LenseView({self.layout.name}, {self.layout.length} bytes)"