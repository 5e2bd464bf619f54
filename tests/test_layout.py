from pathlib import Path

import pytest

from bwfs.layout import (
    BLOCK_SIZE,
    DIRECT_BLOCKS,
    FILENAME_LENGTH,
    INODES_PER_BLOCK,
    MAGIC,
    Inode,
    Superblock,
    block_path,
)


def test_block_path_zero_padded():
    assert block_path("canvas", 5) == Path("canvas") / "block_005.pbm"


def test_block_path_accepts_path_objects(tmp_path):
    assert block_path(tmp_path, 0).name == "block_000.pbm"
    assert block_path(tmp_path, 0).parent == tmp_path


def test_superblock_record_size():
    assert len(Superblock().pack()) == 24


def test_superblock_magic_bytes_little_endian():
    assert Superblock().pack()[:4] == b"SFWB"


def test_superblock_round_trip():
    sb = Superblock(
        magic=MAGIC,
        total_blocks=77,
        inode_table_start=2,
        data_block_start=9,
        free_block_bitmap=8,
        free_inode_bitmap=8,
    )
    assert Superblock.unpack(sb.pack()) == sb


def test_superblock_validity():
    assert Superblock().is_valid
    assert not Superblock(magic=0).is_valid


def test_superblock_unpack_wrong_length():
    with pytest.raises(ValueError):
        Superblock.unpack(b"\0" * 10)


def test_superblock_field_out_of_range():
    with pytest.raises(ValueError):
        Superblock(total_blocks=-1).pack()


def test_inode_record_size_and_per_block():
    packed = Inode(used=True, filename="x").pack()
    assert len(packed) == 320
    assert len(packed) == Inode.SIZE
    assert INODES_PER_BLOCK * len(packed) <= BLOCK_SIZE
    assert (INODES_PER_BLOCK + 1) * len(packed) > BLOCK_SIZE


def test_inode_round_trip():
    inode = Inode(
        used=True,
        is_directory=True,
        filename="docs",
        size=42,
        blocks=(6, 7, 8),
        created_at=1_700_000_000,
        modified_at=1_700_000_100,
    )
    restored = Inode.unpack(inode.pack())
    assert restored == inode
    assert restored.blocks[:3] == (6, 7, 8)
    assert len(restored.blocks) == DIRECT_BLOCKS


def test_empty_inode_packs_to_zeros():
    assert Inode().pack() == bytes(Inode.SIZE)


def test_inode_flags_at_start():
    data = Inode(used=True, is_directory=False, filename="x").pack()
    assert data[0] == 1
    assert data[1] == 0
    assert data[2:3] == b"x"


def test_long_name_truncated():
    inode = Inode(used=True, filename="a" * 300)
    restored = Inode.unpack(inode.pack())
    assert restored.filename == "a" * (FILENAME_LENGTH - 1)


def test_multibyte_name_not_split():
    name = "é" * 200
    restored = Inode.unpack(Inode(filename=name).pack())
    assert name.startswith(restored.filename)
    assert len(restored.filename.encode("utf-8")) <= FILENAME_LENGTH - 1


def test_too_many_blocks_rejected():
    with pytest.raises(ValueError):
        Inode(blocks=tuple(range(DIRECT_BLOCKS + 1)))


def test_inode_unpack_wrong_length():
    with pytest.raises(ValueError):
        Inode.unpack(b"\0" * (Inode.SIZE - 1))