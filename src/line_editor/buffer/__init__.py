"""Character buffer, undo records, and bounds checks."""

from .buffer import CharBuffer
from .undo import Appended, Deleted, UndoHistory, UndoRecord
from .validation import ensure_delete_count, ensure_index

__all__ = [
    "CharBuffer",
    "Appended",
    "Deleted",
    "UndoRecord",
    "UndoHistory",
    "ensure_delete_count",
    "ensure_index",
]
