"""A toy block filesystem stored as a folder of PBM image blocks."""

__version__ = "0.1.0"
__all__ = ["layout", "storage", "mkfs", "fsck", "operations"]