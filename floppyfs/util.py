"""Block-level helpers: raw dumps, single-block extraction and block allocation."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from .disk import DiskError
from .layout import BLOCK_NUMBER, BLOCK_SIZE, SuperBlock

_MOUNT_MESSAGE = "program executed\n\n\n"


def dump_bytes(filename: str | os.PathLike[str], data: bytes) -> int:
    """Write ``data`` as-is to ``filename``, replacing it; return the byte count."""
    payload = bytes(data)
    try:
        with open(filename, "wb") as dump_file:
            dump_file.write(payload)
            dump_file.flush()
    except OSError as exc:
        raise DiskError(f"could not write dump file {os.fspath(filename)!r}") from exc
    return len(payload)


def dump_block(
    disk_filename: str | os.PathLike[str],
    block_number: int,
    directory: str | os.PathLike[str] = ".",
) -> Path:
    """Copy one block of a disk image to ``block_<n>.dump`` in ``directory``.

    Returns the path of the dump file.
    """
    try:
        disk = open(disk_filename, "rb")
    except OSError as exc:
        raise DiskError("could not open disk for reading") from exc

    with disk:
        if block_number < 0 or block_number * BLOCK_SIZE > BLOCK_SIZE * BLOCK_NUMBER:
            raise DiskError("the requested block is out of bounds")
        disk.seek(block_number * BLOCK_SIZE)
        block = disk.read(BLOCK_SIZE).ljust(BLOCK_SIZE, b"\x00")

    target = Path(directory) / f"block_{block_number}.dump"
    dump_bytes(target, block)
    return target


def _first_free(bitmap: bytes, data_start: int) -> int | None:
    for byte_index, byte in enumerate(bitmap):
        if byte != 0xFF:
            bit_index = ((~byte) & (byte + 1)).bit_length() - 1
            return data_start + byte_index * 8 + bit_index
    return None


def allocate_block(disk_filename: str | os.PathLike[str]) -> int | None:
    """Find the first free data block according to the block bitmap.

    Bits are scanned byte by byte, least significant bit first. The bitmap on
    disk is left untouched. Returns None when every block is in use.
    """
    try:
        disk = open(disk_filename, "rb")
    except OSError as exc:
        raise DiskError("disk could not be opened") from exc

    with disk:
        header = disk.read(SuperBlock.SIZE)
        if len(header) < SuperBlock.SIZE:
            raise DiskError("could not read the superblock")
        superblock = SuperBlock.unpack(header)

        bitmap = bytearray()
        for offset in range(superblock.block_bitmap_block_count):
            disk.seek((superblock.block_bitmap_block_start + offset) * BLOCK_SIZE)
            bitmap += disk.read(BLOCK_SIZE).ljust(BLOCK_SIZE, b"\x00")

    return _first_free(bitmap, superblock.data_region_block_start)


def test_mount() -> str:
    """Report on stdout that the program ran with a mounted disk.

    Returns the message that was written.
    """
    sys.stdout.write(_MOUNT_MESSAGE)
    sys.stdout.flush()
    return _MOUNT_MESSAGE