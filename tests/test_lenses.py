import pytest

from rosenpass.lenses import LenseError, LenseLayout, LenseView


@pytest.fixture
def udp_header():
    return LenseLayout(
        "UdpDatagramHeader",
        [("source_port", 2), ("dest_port", 2), ("length", 2), ("checksum", 2)],
    )


def test_ensure_exact_buffer_size():
    assert LenseError.ensure_exact_buffer_size(4, 4) is None
    with pytest.raises(LenseError):
        LenseError.ensure_exact_buffer_size(5, 4)
    with pytest.raises(LenseError):
        LenseError.ensure_exact_buffer_size(3, 4)


def test_ensure_sufficient_buffer_size():
    assert LenseError.ensure_sufficient_buffer_size(5, 4) is None
    with pytest.raises(LenseError):
        LenseError.ensure_sufficient_buffer_size(3, 4)


def test_error_message():
    assert str(LenseError()) == "buffer size mismatch"


def test_udp_example(udp_header):
    buf = bytearray(8)
    assert LenseView(udp_header, buf).get("checksum") == b"\x00\x00"

    view = udp_header.view(buf)
    view.set("source_port", (53).to_bytes(2, "big"))
    assert bytes(buf) == bytes([0, 53, 0, 0, 0, 0, 0, 0])

    read_only = udp_header.view(bytes(buf))
    assert read_only.get("source_port") == bytes([0, 53])


def test_layout_sizes(udp_header):
    assert udp_header.length == 8
    assert len(udp_header) == udp_header.length
    assert udp_header.field_len("checksum") == 2
    assert udp_header.offset("source_port") == 0
    assert udp_header.offset("length") == 4
    assert udp_header.fields == ("source_port", "dest_port", "length", "checksum")


def test_offsets_are_cumulative(udp_header):
    names = udp_header.fields
    for prev, cur in zip(names, names[1:]):
        assert udp_header.offset(cur) == udp_header.offset(prev) + udp_header.field_len(prev)


def test_check_size(udp_header):
    assert udp_header.check_size(udp_header.length) is None
    with pytest.raises(LenseError):
        udp_header.check_size(udp_header.length + 1)


def test_view_rejects_wrong_size(udp_header):
    with pytest.raises(LenseError):
        udp_header.view(bytearray(9))
    with pytest.raises(LenseError):
        udp_header.view(b"\x00" * 7)


def test_view_truncating(udp_header):
    buf = bytearray(range(10))
    view = udp_header.view_truncating(buf)
    assert view.all_bytes() == bytes(buf[:8])
    view.set("checksum", b"\xff\xff")
    assert buf[6:8] == b"\xff\xff"
    assert buf[8:] == bytes([8, 9])
    with pytest.raises(LenseError):
        udp_header.view_truncating(bytearray(3))


def test_until(udp_header):
    buf = bytes(range(8))
    view = udp_header.view(buf)
    assert view.until("source_port") == b""
    assert view.until("length") == buf[:4]
    assert view["dest_port"] == buf[2:4]


def test_set_errors(udp_header):
    ro = udp_header.view(bytes(8))
    with pytest.raises(TypeError):
        ro.set("length", b"\x00\x01")
    rw = udp_header.view(bytearray(8))
    with pytest.raises(LenseError):
        rw.set("length", b"\x00\x01\x02")
    with pytest.raises(KeyError):
        rw.get("missing")


def test_invalid_layouts():
    with pytest.raises(ValueError):
        LenseLayout("Dup", [("a", 1), ("a", 2)])
    with pytest.raises(ValueError):
        LenseLayout("Neg", {"a": -1})
    with pytest.raises(ValueError):
        LenseLayout("Empty", [])