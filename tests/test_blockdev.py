import pytest

from tinykern.blockdev import (
    BlockDevType,
    BlockRegistry,
    DeviceType,
    FileBlockDevice,
    MemoryBlockDevice,
    detect_device_type,
    device_length,
    ip_checksum,
    lba48_bytes,
    swap_word_bytes,
)


@pytest.mark.parametrize(
    "cl, ch, expected",
    [
        (0x14, 0xEB, DeviceType.PATAPI),
        (0x69, 0x96, DeviceType.SATAPI),
        (0, 0, DeviceType.PATA),
        (0x3C, 0xC3, DeviceType.SATA),
        (0x12, 0x34, DeviceType.UNKNOWN),
    ],
)
def test_detect_device_type(cl, ch, expected):
    assert detect_device_type(cl, ch) is expected


def test_memory_device_reads_blocks():
    data = bytes(range(256)) * 4
    dev = MemoryBlockDevice(data, name="disk", blk_size=512)
    assert dev.tot_length == 2
    assert dev.read_block(0) == data[:512]
    assert dev.read_block(1) == data[512:]
    assert dev.dev_type is BlockDevType.MASS_STORAGE
    assert dev.name == "disk"


def test_memory_device_pads_partial_block():
    dev = MemoryBlockDevice(b"abc", blk_size=8)
    assert dev.tot_length == 1
    assert dev.read_block(0) == b"abc" + b"\0" * 5


@pytest.mark.parametrize("blk", [-1, 2])
def test_memory_device_out_of_range(blk):
    dev = MemoryBlockDevice(b"\1" * 1024)
    with pytest.raises(IndexError):
        dev.read_block(blk)


def test_bad_block_size():
    with pytest.raises(ValueError):
        MemoryBlockDevice(b"abc", blk_size=0)


def test_file_device(tmp_path):
    path = tmp_path / "disk.img"
    data = b"A" * 512 + b"B" * 100
    path.write_bytes(data)
    with FileBlockDevice(path, name="img") as dev:
        assert dev.tot_length == 2
        assert dev.read_block(0) == b"A" * 512
        assert dev.read_block(1) == b"B" * 100 + b"\0" * 412
        with pytest.raises(IndexError):
            dev.read_block(2)
    with pytest.raises(ValueError):
        dev.read_block(0)


def test_registry_keeps_order():
    reg = BlockRegistry()
    a = MemoryBlockDevice(b"a", name="a")
    b = MemoryBlockDevice(b"b", name="b")
    reg.register(a)
    reg.register(b)
    assert len(reg) == 2
    assert list(reg) == [a, b]


def test_ip_checksum_worked_example():
    header = bytes.fromhex("450000730000400040110000c0a80001c0a800c7")
    assert ip_checksum(header) == 0xB861


def test_ip_checksum_verifies_to_zero():
    data = bytes(range(1, 41))
    check = ip_checksum(data)
    assert ip_checksum(data + check.to_bytes(2, "big")) == 0


def test_ip_checksum_empty():
    assert ip_checksum(b"") == 0xFFFF


def test_ip_checksum_odd_length_pads_with_zero():
    assert ip_checksum(b"\x12\x34\x56") == ip_checksum(b"\x12\x34\x56\x00")


def test_swap_word_bytes():
    assert swap_word_bytes(b"\x01\x02\x03\x04") == b"\x02\x01\x04\x03"
    data = bytes(range(64))
    assert swap_word_bytes(swap_word_bytes(data)) == data


def test_swap_word_bytes_odd():
    with pytest.raises(ValueError):
        swap_word_bytes(b"abc")


def test_lba48_bytes():
    assert lba48_bytes(0x060504030201) == bytes([1, 2, 3, 4, 5, 6])
    assert int.from_bytes(lba48_bytes(123456789), "little") == 123456789


@pytest.mark.parametrize("bad", [-1, 1 << 48])
def test_lba48_bytes_range(bad):
    with pytest.raises(ValueError):
        lba48_bytes(bad)


def test_device_length():
    words = [0] * 256
    words[100] = 1234
    assert device_length(words) == 1234
    words[102] = 3
    assert device_length(words) == (3 << 32) | 1234


def test_device_length_errors():
    with pytest.raises(ValueError):
        device_length([0] * 103)
    words = [0] * 104
    words[101] = 0x10000
    with pytest.raises(ValueError):
        device_length(words)