"""Command line entry point: mounts the disk and dispatches one command."""

from __future__ import annotations

import re
import sys
from collections.abc import Callable, Sequence

from .disk import (
    DiskError,
    MountedDisk,
    describe_superblock,
    init_empty_disk,
    read_disk,
    write_superblock,
)
from .layout import BLOCK_SIZE, DEFAULT_DISK_NAME, SuperBlock
from .util import allocate_block, dump_block, test_mount

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class _UsageError(ValueError):
    """The command line could not be understood."""


def _parse_block_number(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        raise _UsageError("number of blocks is not an integer")
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        raise OverflowError("number of blocks is outside of integer range")
    return value


class CommandInterface:
    """Maps command names to the operations they run on a mounted disk."""

    def __init__(self, disk: MountedDisk) -> None:
        self.disk = disk
        self._commands: dict[str, Callable[[Sequence[str]], None]] = {
            "write-superblock": self._write_superblock,
            "init": self._init,
            "read": self._read,
            "dump": self._dump,
            "test-allocate": self._test_allocate,
            "test-mount": self._test_mount,
        }

    def dispatch(self, args: Sequence[str]) -> None:
        """Run the command named by ``args[0]`` with the full argument list."""
        if not args or args[0] not in self._commands:
            raise _UsageError("invalid command")
        self._commands[args[0]](args)

    def _write_superblock(self, args: Sequence[str]) -> None:
        write_superblock(self.disk.filename)
        print("wrote superblock to disk")

    def _init(self, args: Sequence[str]) -> None:
        init_empty_disk(self.disk.filename)
        print("initialized empty disk")

    def _read(self, args: Sequence[str]) -> None:
        superblock = read_disk(self.disk.filename)
        print(f"bytes read: {SuperBlock.SIZE}\n\n")
        print(describe_superblock(superblock), end="")

    def _dump(self, args: Sequence[str]) -> None:
        if len(args) < 2:
            raise _UsageError("too few arguments")
        try:
            block_number = _parse_block_number(args[1])
        except (_UsageError, OverflowError) as exc:
            print(f"dump error: {exc}", file=sys.stderr)
            return
        target = dump_block(self.disk.filename, block_number, ".")
        print(f"{BLOCK_SIZE} bytes dumped to {target}")

    def _test_allocate(self, args: Sequence[str]) -> None:
        allocate_block(self.disk.filename)

    def _test_mount(self, args: Sequence[str]) -> None:
        test_mount()


def main(argv: Sequence[str] | None = None) -> int:
    """Mount the disk in the working directory and run one command."""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        disk = MountedDisk(DEFAULT_DISK_NAME)
    except DiskError as exc:
        print(f"mount error: {exc}", file=sys.stderr)
        return 1

    try:
        with disk:
            CommandInterface(disk).dispatch(args)
    except (_UsageError, DiskError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0