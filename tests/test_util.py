import pytest

from floppyfs import util
from floppyfs.disk import DiskError, init_empty_disk
from floppyfs.layout import BLOCK_NUMBER, BLOCK_SIZE, default_superblock


@pytest.fixture
def disk_path(tmp_path):
    path = tmp_path / "floppy.disk"
    init_empty_disk(path)
    with open(path, "r+b") as disk:
        disk.write(default_superblock().to_block())
    return path


def _write_at(path, offset, data):
    with open(path, "r+b") as disk:
        disk.seek(offset)
        disk.write(data)


def _bitmap_offset():
    return default_superblock().block_bitmap_block_start * BLOCK_SIZE


def test_dump_bytes_writes_exact_content(tmp_path):
    target = tmp_path / "out.dump"
    payload = bytes(range(200))
    assert util.dump_bytes(target, payload) == len(payload)
    assert target.read_bytes() == payload


def test_dump_bytes_truncates_existing_file(tmp_path):
    target = tmp_path / "out.dump"
    target.write_bytes(b"x" * 1000)
    util.dump_bytes(target, b"abc")
    assert target.read_bytes() == b"abc"


def test_dump_bytes_missing_directory_raises(tmp_path):
    with pytest.raises(DiskError):
        util.dump_bytes(tmp_path / "nowhere" / "out.dump", b"abc")


def test_dump_block_copies_requested_block(disk_path, tmp_path):
    marker = bytes([0xAB]) * BLOCK_SIZE
    _write_at(disk_path, 5 * BLOCK_SIZE, marker)
    target = util.dump_block(disk_path, 5, tmp_path)
    assert target.name == "block_5.dump"
    assert target.read_bytes() == marker


def test_dump_block_zero_is_superblock(disk_path, tmp_path):
    target = util.dump_block(disk_path, 0, tmp_path)
    assert target.read_bytes() == default_superblock().to_block()


def test_dump_block_past_end_pads_with_zeros(disk_path, tmp_path):
    target = util.dump_block(disk_path, BLOCK_NUMBER, tmp_path)
    assert target.read_bytes() == bytes(BLOCK_SIZE)


@pytest.mark.parametrize("block_number", [BLOCK_NUMBER + 1, -1])
def test_dump_block_out_of_bounds(disk_path, tmp_path, block_number):
    with pytest.raises(DiskError, match="out of bounds"):
        util.dump_block(disk_path, block_number, tmp_path)
    assert list(tmp_path.glob("*.dump")) == []


def test_dump_block_missing_disk(tmp_path):
    with pytest.raises(DiskError):
        util.dump_block(tmp_path / "missing.disk", 1, tmp_path)


def test_allocate_block_on_fresh_disk(disk_path):
    assert util.allocate_block(disk_path) == default_superblock().data_region_block_start


def test_allocate_block_skips_used_bits(disk_path):
    _write_at(disk_path, _bitmap_offset(), bytes([0b00000111]))
    start = default_superblock().data_region_block_start
    assert util.allocate_block(disk_path) == start + 3


def test_allocate_block_moves_to_next_byte(disk_path):
    _write_at(disk_path, _bitmap_offset(), bytes([0xFF, 0x01]))
    start = default_superblock().data_region_block_start
    assert util.allocate_block(disk_path) == start + 8 + 1


def test_allocate_block_scans_later_bitmap_blocks(disk_path):
    _write_at(disk_path, _bitmap_offset(), b"\xff" * BLOCK_SIZE)
    start = default_superblock().data_region_block_start
    assert util.allocate_block(disk_path) == start + BLOCK_SIZE * 8


def test_allocate_block_does_not_persist(disk_path):
    first = util.allocate_block(disk_path)
    assert util.allocate_block(disk_path) == first


def test_allocate_block_full_bitmap_returns_none(disk_path):
    count = default_superblock().block_bitmap_block_count
    _write_at(disk_path, _bitmap_offset(), b"\xff" * (BLOCK_SIZE * count))
    assert util.allocate_block(disk_path) is None


def test_allocate_block_missing_disk(tmp_path):
    with pytest.raises(DiskError):
        util.allocate_block(tmp_path / "missing.disk")


def test_allocate_block_short_file(tmp_path):
    path = tmp_path / "short.disk"
    path.write_bytes(b"\x00" * 10)
    with pytest.raises(DiskError):
        util.allocate_block(path)


def test_test_mount_prints_message(capsys):
    util.test_mount()
    assert capsys.readouterr().out == "program executed\n\n\n"