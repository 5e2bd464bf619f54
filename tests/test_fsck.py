import pytest

from bwfs.fsck import (
    FsckError,
    check,
    format_bitmap,
    main,
    read_bitmaps,
    read_superblock,
)
from bwfs.layout import (
    BITMAP_BLOCK_NUMBER,
    INODES,
    MAX_BLOCKS,
    Superblock,
    block_path,
)
from bwfs.mkfs import make_filesystem


@pytest.fixture
def volume(tmp_path):
    folder = tmp_path / "fs"
    make_filesystem(folder)
    return folder


def _corrupt_magic(folder):
    path = block_path(folder, 0)
    data = path.read_bytes()
    bad = Superblock(magic=0).pack()
    path.write_bytes(data[: -len(bad)] + bad)


def test_read_superblock(volume):
    assert read_superblock(volume) == Superblock()


def test_read_superblock_missing(tmp_path):
    with pytest.raises(FsckError):
        read_superblock(tmp_path / "nothing")


def test_read_bitmaps(volume):
    block_bitmap, inode_bitmap = read_bitmaps(volume)
    assert len(block_bitmap) == MAX_BLOCKS
    assert len(inode_bitmap) == INODES
    assert [i for i, b in enumerate(block_bitmap) if b] == list(
        range(BITMAP_BLOCK_NUMBER + 1)
    )
    assert not any(inode_bitmap)


def test_format_bitmap():
    assert format_bitmap("Used", bytes([0, 1, 0, 1])) == "🧾 Used:\n [1] [3]"
    assert format_bitmap("Empty", bytes(4)) == "🧾 Empty:\n"


def test_check_valid_volume(volume):
    report = check(volume)
    assert "Superblock OK" in report
    sb = Superblock()
    assert f"Total blocks: {sb.total_blocks}" in report
    assert " [0]" in report
    assert f" [{BITMAP_BLOCK_NUMBER}]" in report
    assert f" [{BITMAP_BLOCK_NUMBER + 1}]" not in report


def test_check_bad_magic(volume):
    _corrupt_magic(volume)
    with pytest.raises(FsckError, match="magic"):
        check(volume)


def test_main_ok(volume, capsys):
    assert main([str(volume)]) == 0
    assert "Superblock OK" in capsys.readouterr().out


def test_main_bad_magic(volume):
    _corrupt_magic(volume)
    assert main([str(volume)]) == 1


def test_main_usage(capsys):
    assert main([]) == 1
    assert main(["a", "b"]) == 1
    assert "Usage" in capsys.readouterr().out