"""On-disk layout: block geometry, the superblock and the inode record."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

BLOCK_SIZE = 512
BLOCK_NUMBER = 20615
MAGIC = 0xFEAB1E33
DEFAULT_DISK_NAME = "floppy.disk"

_SUPERBLOCK_HEADER = struct.Struct("<8QIBB")
SUPERBLOCK_PADDING = 442
SUPERBLOCK_SIZE = _SUPERBLOCK_HEADER.size + SUPERBLOCK_PADDING

_INODE_POINTERS = 8
_INODE_HEADER = struct.Struct(f"<II{_INODE_POINTERS}I")
INODE_PADDING = 24
INODE_SIZE = _INODE_HEADER.size + INODE_PADDING


@dataclass
class SuperBlock:
    """The first block of a disk, describing where every region lives."""

    inode_table_block_count: int = 0
    inode_table_block_start: int = 0
    block_bitmap_block_start: int = 0
    block_bitmap_block_count: int = 0
    inode_bitmap_block_start: int = 0
    inode_bitmap_block_count: int = 0
    data_region_block_start: int = 0
    data_region_block_count: int = 0
    magic: int = 0
    version_major: int = 0
    version_minor: int = 0
    padding: bytes = field(default=bytes(SUPERBLOCK_PADDING), repr=False)

    SIZE = SUPERBLOCK_SIZE

    def pack(self) -> bytes:
        """Encode the superblock exactly as it is stored on disk."""
        if len(self.padding) != SUPERBLOCK_PADDING:
            raise ValueError(
                f"superblock padding must be {SUPERBLOCK_PADDING} bytes, "
                f"got {len(self.padding)}"
            )
        try:
            header = _SUPERBLOCK_HEADER.pack(
                self.inode_table_block_count,
                self.inode_table_block_start,
                self.block_bitmap_block_start,
                self.block_bitmap_block_count,
                self.inode_bitmap_block_start,
                self.inode_bitmap_block_count,
                self.data_region_block_start,
                self.data_region_block_count,
                self.magic,
                self.version_major,
                self.version_minor,
            )
        except struct.error as exc:
            raise ValueError(f"superblock field out of range: {exc}") from exc
        return header + bytes(self.padding)

    @classmethod
    def unpack(cls, data: bytes) -> SuperBlock:
        """Decode a superblock from the start of ``data``."""
        if len(data) < SUPERBLOCK_SIZE:
            raise ValueError(
                f"superblock needs {SUPERBLOCK_SIZE} bytes, got {len(data)}"
            )
        fields = _SUPERBLOCK_HEADER.unpack_from(data)
        padding = bytes(data[_SUPERBLOCK_HEADER.size:SUPERBLOCK_SIZE])
        return cls(*fields, padding=padding)

    def to_block(self) -> bytes:
        """Encode the superblock into a zero-padded block of BLOCK_SIZE bytes."""
        packed = self.pack()
        return packed + bytes(BLOCK_SIZE - len(packed))

    @property
    def magic_ok(self) -> bool:
        return self.magic == MAGIC


@dataclass
class Inode:
    """A fixed-size file record: index, size and direct block pointers."""

    index: int = 0
    file_size: int = 0
    block_pointers: tuple[int, ...] = (0,) * _INODE_POINTERS

    SIZE = INODE_SIZE

    def pack(self) -> bytes:
        """Encode the inode as a 64-byte record."""
        pointers = tuple(self.block_pointers)
        if len(pointers) > _INODE_POINTERS:
            raise ValueError(
                f"an inode holds at most {_INODE_POINTERS} block pointers"
            )
        pointers += (0,) * (_INODE_POINTERS - len(pointers))
        try:
            header = _INODE_HEADER.pack(self.index, self.file_size, *pointers)
        except struct.error as exc:
            raise ValueError(f"inode field out of range: {exc}") from exc
        return header + bytes(INODE_PADDING)

    @classmethod
    def unpack(cls, data: bytes) -> Inode:
        """Decode an inode from the start of ``data``."""
        if len(data) < INODE_SIZE:
            raise ValueError(f"inode needs {INODE_SIZE} bytes, got {len(data)}")
        index, file_size, *pointers = _INODE_HEADER.unpack_from(data)
        return cls(index=index, file_size=file_size, block_pointers=tuple(pointers))


def default_superblock() -> SuperBlock:
    """The superblock of a standard 10 MB disk.

    block 0: superblock; 1-127: inode table; 128-132: block bitmap;
    133: inode bitmap; 134 onwards: data region of 20480 blocks.
    """
    return SuperBlock(
        inode_table_block_count=127,
        inode_table_block_start=1,
        block_bitmap_block_start=128,
        block_bitmap_block_count=5,
        inode_bitmap_block_start=133,
        inode_bitmap_block_count=1,
        data_region_block_start=134,
        data_region_block_count=20480,
        magic=MAGIC,
        version_major=1,
        version_minor=1,
    )