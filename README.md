# bwfs

A small block filesystem whose blocks are kept as plain-text PBM image files
(`block_000.pbm`, `block_001.pbm`, ...) inside an ordinary folder. Each block
file starts as a blank P1 image, and the binary structures are appended to its
end:

- block 0 holds the superblock (magic `0x42574653`, total block count and the
  positions of the inode table, bitmaps and data blocks);
- blocks 1–4 hold the inode table (128 inodes in all);
- block 5 holds the block bitmap (1024 bytes) followed by the inode bitmap
  (128 bytes).

## Installation

```
pip install .
```

For running the test suite:

```
pip install .[test]
pytest
```

## Creating a filesystem

```
mkfs-bwfs canvas
```

This creates the `canvas` folder (if needed), writes 128 blank blocks, the
superblock, an empty inode table and the initial bitmaps, in which blocks 0–5
are marked as used and every inode as free. It exits with status 1 when given
the wrong number of arguments or when the files cannot be written.

## Checking a filesystem

```
fsck-bwfs canvas
```

This reads the superblock, validates its magic number, prints the total block
count and the starting blocks of the data area and the inode table, and lists
the indices set in the block bitmap and in the inode bitmap. It exits with
status 1, printing the reason on standard error, when the folder cannot be
read or does not hold a valid filesystem.

## Using it from Python

```python
from bwfs.mkfs import make_filesystem
from bwfs.operations import BwfsOperations

make_filesystem("canvas")
fs = BwfsOperations("canvas")

index = fs.mkdir("/photos", 0o755)   # the inode number taken, 0 on a fresh volume
print(fs.readdir("/"))               # ['.', '..', 'photos']
attrs = fs.getattr("/photos")        # Attributes(mode=..., nlink=2, ctime=..., mtime=..., atime=...)
```

`BwfsOperations` offers three operations:

- `getattr(path)` returns an `Attributes` record (`mode`, `nlink`, `size`,
  `ctime`, `mtime`, `atime`) for `/` or for a used inode whose name matches
  the path without its leading slash;
- `readdir(path)` lists `/` as `.`, `..` and the name of every used directory
  inode;
- `mkdir(path, mode)` takes the first free inode in the inode bitmap, stores
  a directory inode named after the path and marks the inode as used. The
  `mode` argument is accepted and ignored.

They raise `OSError` with the matching `errno`: `ENOENT` for an unknown path
or a directory other than `/` in `readdir`, `EEXIST` for `mkdir("/")`,
`ENOSPC` when no free inode can be found, `EIO` when the bitmap cannot be
updated.

Lower-level access to the on-disk structures lives in `bwfs.layout`
(`Superblock`, `Inode`, `block_path`) and `bwfs.storage` (`load_inodes`,
`save_inode`, `find_free_inode`). `bwfs.mkfs` exposes the individual steps
(`write_blank_block`, `write_superblock`, `write_inode_table`,
`write_bitmaps`) as well as `make_filesystem`. `bwfs.fsck` offers `check`,
`read_superblock`, `read_bitmaps`, `format_bitmap` and `FsckError` for
inspection.

## What it does not do

- There is no mount command: `BwfsOperations` provides the operations a
  mounted filesystem would answer, but nothing in the package attaches them
  to a mount point.
- Only the root directory exists as a real directory: names are flat, so
  `mkdir("/a/b")` creates an entry named `a/b` rather than a nested
  directory, and `mkdir` does not check whether a name is already taken.
- Files cannot be created, read or written, and the block bitmap is never
  updated after `mkfs-bwfs`; data blocks are not allocated.
- `fsck-bwfs` only checks the superblock magic and reports the bitmaps; it
  repairs nothing.