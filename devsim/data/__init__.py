"""Historical player record loading."""

from .loader import RecordFormatError, RecordLoader

__all__ = ["RecordFormatError", "RecordLoader"]
