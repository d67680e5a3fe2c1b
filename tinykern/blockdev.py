"""Block devices, a registry for them, and ATA helper routines."""

from __future__ import annotations

import abc
import enum
import os
from typing import BinaryIO, Iterator, List, Sequence, Union

DEFAULT_BLOCK_SIZE = 512

# Identify-space word indices holding the 48-bit addressable sector count.
_LBA48_SECTORS_FIRST_WORD = 100
_LBA48_SECTORS_WORDS = 4


class BlockDevType(enum.Enum):
    """What a block device represents."""

    MASS_STORAGE = 0
    PARTITION = 1


class DeviceType(enum.IntEnum):
    """ATA device kinds as distinguished by their signature bytes."""

    PATAPI = 0
    SATAPI = 1
    PATA = 2
    SATA = 3
    UNKNOWN = 4


_SIGNATURES = {
    (0x14, 0xEB): DeviceType.PATAPI,
    (0x69, 0x96): DeviceType.SATAPI,
    (0x00, 0x00): DeviceType.PATA,
    (0x3C, 0xC3): DeviceType.SATA,
}


def detect_device_type(cl: int, ch: int) -> DeviceType:
    """Classify a device from the LBA-mid (``cl``) and LBA-high (``ch``) signature bytes."""
    return _SIGNATURES.get((cl, ch), DeviceType.UNKNOWN)


class BlockDevice(abc.ABC):
    """A device addressed in fixed-size blocks."""

    def __init__(
        self,
        name: str,
        blk_size: int,
        tot_length: int,
        dev_type: BlockDevType = BlockDevType.MASS_STORAGE,
    ) -> None:
        if blk_size < 1:
            raise ValueError("block size must be positive")
        self.name = name
        self.blk_size = blk_size
        self.tot_length = tot_length
        self.dev_type = dev_type

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, blk_size={self.blk_size}, "
            f"tot_length={self.tot_length})"
        )

    def _check_block(self, blk_num: int) -> None:
        if blk_num < 0 or blk_num >= self.tot_length:
            raise IndexError(
                f"block {blk_num} out of range for device {self.name!r} "
                f"with {self.tot_length} blocks"
            )

    @abc.abstractmethod
    def read_block(self, blk_num: int) -> bytes:
        """Return the contents of block ``blk_num``, exactly ``blk_size`` bytes long."""


def _block_count(nbytes: int, blk_size: int) -> int:
    return -(-nbytes // blk_size)


class MemoryBlockDevice(BlockDevice):
    """A block device backed by an in-memory byte string.

    A trailing partial block reads back padded with zeros.
    """

    def __init__(
        self,
        data: Union[bytes, bytearray, memoryview],
        name: str = "mem",
        blk_size: int = DEFAULT_BLOCK_SIZE,
    ) -> None:
        self._data = bytes(data)
        if blk_size < 1:
            raise ValueError("block size must be positive")
        super().__init__(name, blk_size, _block_count(len(self._data), blk_size))

    def read_block(self, blk_num: int) -> bytes:
        self._check_block(blk_num)
        start = blk_num * self.blk_size
        return self._data[start:start + self.blk_size].ljust(self.blk_size, b"\0")


class FileBlockDevice(BlockDevice):
    """A block device backed by a disk image file opened read-only."""

    def __init__(
        self,
        path: Union[str, os.PathLike],
        name: str = "file",
        blk_size: int = DEFAULT_BLOCK_SIZE,
    ) -> None:
        if blk_size < 1:
            raise ValueError("block size must be positive")
        self._file: BinaryIO = open(path, "rb")
        try:
            size = os.fstat(self._file.fileno()).st_size
        except OSError:
            self._file.close()
            raise
        super().__init__(name, blk_size, _block_count(size, blk_size))

    def read_block(self, blk_num: int) -> bytes:
        self._check_block(blk_num)
        self._file.seek(blk_num * self.blk_size)
        return self._file.read(self.blk_size).ljust(self.blk_size, b"\0")

    def close(self) -> None:
        """Release the underlying file."""
        self._file.close()

    def __enter__(self) -> "FileBlockDevice":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class BlockRegistry:
    """Block devices in the order they were registered."""

    def __init__(self) -> None:
        self._devices: List[BlockDevice] = []

    def register(self, dev: BlockDevice) -> None:
        """Append ``dev`` to the registry."""
        self._devices.append(dev)

    def __len__(self) -> int:
        return len(self._devices)

    def __iter__(self) -> Iterator[BlockDevice]:
        return iter(self._devices)


def ip_checksum(data: Union[bytes, bytearray, memoryview]) -> int:
    """Internet checksum: one's complement of the folded sum of big-endian 16-bit words."""
    raw = bytes(data)
    if len(raw) % 2:
        raw += b"\0"
    total = sum(int.from_bytes(raw[k:k + 2], "big") for k in range(0, len(raw), 2))
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return ~total & 0xFFFF


def swap_word_bytes(data: Union[bytes, bytearray, memoryview]) -> bytes:
    """Swap the two bytes of every 16-bit word."""
    raw = bytes(data)
    if len(raw) % 2:
        raise ValueError("data length must be even to swap 16-bit words")
    swapped = bytearray(len(raw))
    swapped[0::2] = raw[1::2]
    swapped[1::2] = raw[0::2]
    return bytes(swapped)


def lba48_bytes(blk_num: int) -> bytes:
    """Split a 48-bit block address into its six bytes, least significant first.

    Bytes 0-2 form the low half written last, bytes 3-5 the high half written first.
    """
    if blk_num < 0 or blk_num >= 1 << 48:
        raise ValueError(f"block number {blk_num} does not fit in 48 bits")
    return blk_num.to_bytes(6, "little")


def device_length(identify_words: Sequence[int]) -> int:
    """Number of addressable sectors from IDENTIFY data words 100 to 103."""
    end = _LBA48_SECTORS_FIRST_WORD + _LBA48_SECTORS_WORDS
    if len(identify_words) < end:
        raise ValueError(f"identify data needs at least {end} words, got {len(identify_words)}")
    words = identify_words[_LBA48_SECTORS_FIRST_WORD:end]
    if any(not 0 <= w <= 0xFFFF for w in words):
        raise ValueError("identify words must be 16-bit values")
    return sum(w << (16 * k) for k, w in enumerate(words))