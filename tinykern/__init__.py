"""Block devices, ATA helpers and small kernel-style data structures."""

__version__ = "0.1.0"

__all__ = ["blockdev", "clist", "keyboard", "ring", "scheduler"]