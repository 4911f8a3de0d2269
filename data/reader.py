import mmap
import random
import struct
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

FIELD_SEPARATOR = "\t"


class EntryReader:
    """Memory-efficient reader for binary directory entries with cumulative position index."""

    def __init__(self, filepath: Union[str, Path], limit: Optional[int] = None):
        self.filepath = Path(filepath)
        self.index_filepath = self.filepath.with_suffix(".idx")

        if not self.filepath.exists():
            raise FileNotFoundError(f"Data file not found: {self.filepath}")
        if not self.index_filepath.exists():
            raise FileNotFoundError(f"Index file not found: {self.index_filepath}")

        self._load_index()
        self._limit = limit

        self._data_file = open(self.filepath, "rb")
        data_file_size = self.filepath.stat().st_size
        if data_file_size > 0:
            self._mmapped_data = mmap.mmap(
                self._data_file.fileno(), 0, access=mmap.ACCESS_READ
            )
            self.eof_idx = len(self._mmapped_data)
        else:
            self._mmapped_data = None
            self.eof_idx = 0

    def _load_index(self) -> None:
        """Map the cumulative position index (one little-endian uint64 per entry)."""
        index_size = self.index_filepath.stat().st_size
        self.total_count = index_size // 8

        self._index_file = open(self.index_filepath, "rb")
        if index_size > 0:
            self._mmapped_index = mmap.mmap(
                self._index_file.fileno(), 0, access=mmap.ACCESS_READ
            )
        else:
            self._mmapped_index = None

    def _position(self, idx: int) -> int:
        if self._mmapped_index is None:
            raise IndexError("No data available in empty file")
        return struct.unpack_from("<Q", self._mmapped_index, idx * 8)[0]

    def __len__(self) -> int:
        """Return total number of entries (limited by configured limit)."""
        return self.effective_count

    @property
    def effective_count(self) -> int:
        """Return the effective count considering the limit."""
        if self._limit is not None:
            return min(self._limit, self.total_count)
        return self.total_count

    def set_limit(self, limit: Optional[int]) -> None:
        """Set a new limit for the number of entries to consider."""
        if limit is not None and limit < 0:
            raise ValueError("Limit must be non-negative or None")
        self._limit = limit

    def get_limit(self) -> Optional[int]:
        return self._limit

    def clear_limit(self) -> None:
        """Remove the limit to access all entries."""
        self._limit = None

    def __getitem__(self, index: int) -> Tuple[str, str]:
        """Get the (name, phone) pair at index using O(1) random access."""
        effective_count = self.effective_count

        if index < 0:
            index = effective_count + index

        if not 0 <= index < effective_count:
            raise IndexError(f"Index {index} out of range [0, {effective_count})")

        if self._mmapped_data is None:
            raise IndexError("Cannot access data in empty file")

        start_pos = self._position(index)
        if index + 1 < self.total_count:
            end_pos = self._position(index + 1)
        else:
            end_pos = self.eof_idx

        record = self._mmapped_data[start_pos:end_pos].decode("utf-8")
        name, _, phone = record.partition(FIELD_SEPARATOR)
        return name, phone

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return self.iter_entries()

    def iter_entries(
        self, start: int = 0, end: Optional[int] = None
    ) -> Iterator[Tuple[str, str]]:
        """Iterate over entries in the given range."""
        effective_count = self.effective_count

        if end is None:
            end = effective_count

        if effective_count == 0:
            return
        if not 0 <= start < effective_count:
            raise ValueError(f"Start index {start} out of range")
        if not start <= end <= effective_count:
            raise ValueError(f"End index {end} out of range")

        for i in range(start, end):
            yield self[i]

    def iter_batch(
        self, batch_size: int = 10000, start: int = 0, end: Optional[int] = None
    ) -> Iterator[list[Tuple[str, str]]]:
        """Iterate over entries in batches."""
        if end is None:
            end = self.effective_count

        current = start
        while current < end:
            batch_end = min(current + batch_size, end)
            yield [self[i] for i in range(current, batch_end)]
            current = batch_end

    def get_stats(self) -> dict:
        """Get statistics about the entry dataset."""
        data_size = self.filepath.stat().st_size
        index_size = self.index_filepath.stat().st_size

        return {
            "total_entries": self.total_count,
            "effective_entries": self.effective_count,
            "limit": self._limit,
            "data_file_size": data_size,
            "index_file_size": index_size,
            "total_size": data_size + index_size,
            "avg_record_length": data_size / self.total_count
            if self.total_count > 0
            else 0,
            "index_entry_size": 8,
        }

    def sample(self, count: int = 10) -> list[Tuple[str, str]]:
        """Get a random sample of entries."""
        effective_count = self.effective_count
        if count > effective_count:
            count = effective_count

        indices = random.sample(range(effective_count), count)
        return [self[i] for i in indices]

    def close(self) -> None:
        """Close the memory-mapped files."""
        if getattr(self, "_mmapped_data", None) is not None:
            self._mmapped_data.close()
            self._mmapped_data = None
        if getattr(self, "_mmapped_index", None) is not None:
            self._mmapped_index.close()
            self._mmapped_index = None
        if hasattr(self, "_index_file"):
            self._index_file.close()
        if hasattr(self, "_data_file"):
            self._data_file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __del__(self):
        self.close()
