"""Mounting, creating and inspecting disk image files."""

from __future__ import annotations

import logging
import os
from types import TracebackType

from .layout import (
    BLOCK_NUMBER,
    BLOCK_SIZE,
    DEFAULT_DISK_NAME,
    SuperBlock,
    default_superblock,
)

log = logging.getLogger(__name__)


class DiskError(RuntimeError):
    """A disk image could not be opened, read, verified or written."""


class MountedDisk:
    """An open disk image whose superblock is held in memory.

    The superblock is verified on mount and written back on close.
    """

    def __init__(self, filename: str | os.PathLike[str] = DEFAULT_DISK_NAME) -> None:
        self.filename = os.fspath(filename)
        self.bitmap = bytearray()
        try:
            self._file = open(self.filename, "r+b")
        except OSError as exc:
            raise DiskError(f"could not open disk file {self.filename!r}") from exc
        log.debug("disk file %s opened", self.filename)

        try:
            self._file.seek(0)
            data = self._file.read(SuperBlock.SIZE)
            if len(data) < SuperBlock.SIZE:
                raise DiskError("disk read failed")
            self.superblock = SuperBlock.unpack(data)
            if not self.superblock.magic_ok:
                raise DiskError(
                    "the disk may be corrupted or invalid: magic number mismatch"
                )
        except BaseException:
            self._file.close()
            raise
        log.debug("superblock is %d bytes", SuperBlock.SIZE)

    @property
    def closed(self) -> bool:
        return self._file.closed

    def close(self) -> None:
        """Flush the superblock to the start of the disk and close the file."""
        if self._file.closed:
            return
        try:
            self._file.seek(0)
            self._file.write(self.superblock.pack())
            self._file.flush()
            log.debug("superblock flushed to disk")
        except (OSError, ValueError) as exc:
            self._file.close()
            raise DiskError("disk flush failed; disk close was attempted") from exc
        try:
            self._file.close()
        except OSError as exc:
            raise DiskError("disk may not have closed") from exc
        log.debug("disk file closed")

    def __enter__(self) -> MountedDisk:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def init_empty_disk(filename: str | os.PathLike[str]) -> None:
    """Create or truncate ``filename`` to BLOCK_NUMBER zeroed blocks."""
    zero_block = bytes(BLOCK_SIZE)
    try:
        with open(filename, "wb") as disk:
            for _ in range(BLOCK_NUMBER):
                disk.write(zero_block)
    except OSError as exc:
        raise DiskError("could not open disk for initialization") from exc


def write_superblock(filename: str | os.PathLike[str]) -> SuperBlock:
    """Write the standard superblock as the first block of a fresh file.

    The file is opened for writing from scratch, so anything it held is replaced.
    """
    superblock = default_superblock()
    try:
        with open(filename, "wb") as disk:
            disk.write(superblock.to_block())
    except OSError as exc:
        raise DiskError("could not open disk for writing superblock") from exc
    return superblock


def describe_superblock(superblock: SuperBlock) -> str:
    """A readable overview of every superblock field, one per line."""
    lines = [
        f"major version: {superblock.version_major}",
        f"minor version: {superblock.version_minor}",
        f"inode table block count: {superblock.inode_table_block_count}",
        f"inode table block start: {superblock.inode_table_block_start}",
        f"block bitmap block count: {superblock.block_bitmap_block_count}",
        f"block bitmap block start: {superblock.block_bitmap_block_start}",
        f"inode bitmap block count: {superblock.inode_bitmap_block_count}",
        f"inode bitmap block start: {superblock.inode_bitmap_block_start}",
        f"data region block start: {superblock.data_region_block_start}",
        f"data region block count: {superblock.data_region_block_count}",
    ]
    return "\n".join(lines) + "\n"


def read_disk(filename: str | os.PathLike[str]) -> SuperBlock:
    """Read and verify the superblock of a disk image."""
    try:
        with open(filename, "rb") as disk:
            data = disk.read(SuperBlock.SIZE)
    except OSError as exc:
        raise DiskError(
            "could not open disk for reading, file may not exist"
        ) from exc
    log.debug("bytes read: %d", len(data))
    superblock = SuperBlock.unpack(data.ljust(SuperBlock.SIZE, b"\x00"))
    if not superblock.magic_ok:
        raise DiskError("disk is either invalid or corrupted: magic number mismatch")
    return superblock