# floppyfs

A small block-based file system stored in a single disk image file.
The image is made of 512-byte blocks laid out as follows:

| Blocks          | Region        | Count  |
|-----------------|---------------|--------|
| 0               | superblock    | 1      |
| 1 – 127         | inode table   | 127    |
| 128 – 132       | block bitmap  | 5      |
| 133             | inode bitmap  | 1      |
| 134 – 20613     | data region   | 20,480 |

The superblock carries the magic number `0xFEAB1E33` and a version number
(1.1), and the magic number is checked whenever the disk is mounted.

## Installation

```
pip install .
```

## Getting a first image

```
floppyfs-tempinit
```

This writes a 512-byte `fresh-floppy.disk` in the current directory holding
only the standard superblock. Rename it to `floppy.disk` before you use it
with `floppyfs`.

## Command line

`floppyfs` works on the disk image `floppy.disk` in the current directory.
Before any command runs, the image is mounted: it must exist and carry a
superblock with the right magic number, otherwise `floppyfs` prints a mount
error and exits with status 1. When the command has finished, the superblock
read at mount time is written back to block 0 of the image.

```
floppyfs init               # rewrite the image as 20,615 zeroed blocks
floppyfs write-superblock   # replace the image with a single block holding the standard superblock
floppyfs read               # print every field of the superblock
floppyfs dump 5             # copy block 5 into block_5.dump in the current directory
floppyfs test-allocate      # look for the first free data block (prints nothing)
floppyfs test-mount         # print "program executed" to show the disk mounted
```

Because the mounted superblock is written back on exit, `init` leaves an
image of zeroed blocks whose block 0 still holds the superblock it had
before.

`dump` reads the leading integer of its argument. A missing argument is an
error (status 1); an argument that is not an integer, or is outside the
32-bit signed range, is reported on stderr and nothing is dumped. A block
number below zero or past the end of the image is an error. Blocks beyond
the end of a short image are dumped as zeros.

An unknown command prints `error: invalid command` and exits with status 1.

## Library

```python
from floppyfs.disk import MountedDisk, read_disk, describe_superblock, DiskError
from floppyfs.layout import SuperBlock, Inode, default_superblock, BLOCK_SIZE
from floppyfs.util import allocate_block, dump_block, dump_bytes

with MountedDisk("floppy.disk") as disk:      # superblock written back on exit
    print(disk.superblock)

print(describe_superblock(read_disk("floppy.disk")))
print(default_superblock().data_region_block_start)   # 134

block = allocate_block("floppy.disk")   # first free data block number, or None
path = dump_block("floppy.disk", 0, ".")   # Path to ./block_0.dump
```

- `floppyfs.layout` holds the block geometry (`BLOCK_SIZE`, `BLOCK_NUMBER`,
  `MAGIC`), `SuperBlock` (`pack`, `unpack`, `to_block`, `magic_ok`), the
  64-byte `Inode` record (`pack`, `unpack`) and `default_superblock()`.
- `floppyfs.disk` has `MountedDisk`, `init_empty_disk`, `write_superblock`,
  `read_disk` and `describe_superblock`.
- `floppyfs.util` has `dump_bytes`, `dump_block`, `allocate_block` and
  `test_mount`.
- `floppyfs.tempinit.write_fresh_disk(filename)` writes a one-block image
  with the standard superblock.

If an image is missing, cannot be read, or has the wrong magic number, the
disk functions raise `DiskError`.

## What it does not do

floppyfs lays out and inspects an image, but it does not store files. There
are no directories, no file reading or writing, and no commands to create
or look up inodes; `Inode` only encodes and decodes the record. The inode
bitmap is reserved but never read. `allocate_block` only finds the first
clear bit in the block bitmap: it does not mark the block as used, so calling
it twice returns the same block.