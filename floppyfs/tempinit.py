"""Stand-alone tool that writes a freshly formatted superblock image."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from .disk import DiskError, write_superblock
from .layout import SuperBlock

FRESH_DISK_NAME = "fresh-floppy.disk"


def write_fresh_disk(filename: str | os.PathLike[str] = FRESH_DISK_NAME) -> SuperBlock:
    """Write the standard superblock as the only block of ``filename``."""
    return write_superblock(filename)


def main(argv: Sequence[str] | None = None) -> int:
    """Create the fresh disk image in the working directory."""
    try:
        write_fresh_disk(FRESH_DISK_NAME)
    except DiskError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print("wrote superblock to disk")
    return 0