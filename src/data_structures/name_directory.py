"""
Name directory: name -> phone numbers, using separate chaining.

Each bucket is a list of entries kept sorted by phone number, so a name
search returns its phones in ascending order without an extra sort.
"""

from dataclasses import dataclass
from typing import List

from .hashing import name_to_key, next_prime_at_least


@dataclass(frozen=True)
class NameEntry:
    """A phone number registered under a name."""

    name: str
    phone: str


class NameDirectory:
    """
    Separate-chaining hash table keyed by name.

    The table size is always prime. Rehashing is caller-initiated: inserts
    never grow the table on their own.
    """

    DEFAULT_CAPACITY = 11

    def __init__(self, size: int = DEFAULT_CAPACITY):
        """
        Initialize an empty directory.

        Args:
            size: Initial number of buckets (M)
        """
        if size <= 0:
            raise ValueError("Capacity must be positive")

        self.size = size
        self.table: List[List[NameEntry]] = [[] for _ in range(size)]
        self.entry_count = 0
        self.rehash_count = 0

    @property
    def capacity(self) -> int:
        return self.size

    def bucket_for(self, name: str) -> int:
        """Bucket index of name for the current table size."""
        return name_to_key(name, self.size)

    def insert(self, entry: NameEntry) -> None:
        """
        Insert an entry, keeping its bucket sorted by phone.

        Args:
            entry: The name/phone pair to store
        """
        chain = self.table[self.bucket_for(entry.name)]

        position = len(chain)
        for i, existing in enumerate(chain):
            if existing.phone >= entry.phone:
                position = i
                break

        chain.insert(position, entry)
        self.entry_count += 1

    def search(self, name: str) -> List[str]:
        """
        Find all phone numbers registered under name.

        Args:
            name: Exact name to look up

        Returns:
            Phone numbers in ascending order, empty if the name is unknown
        """
        chain = self.table[self.bucket_for(name)]
        return [entry.phone for entry in chain if entry.name == name]

    def rehash(self) -> None:
        """Grow to the next prime >= 2M + 1 and reinsert every entry."""
        old_table = self.table
        self.size = next_prime_at_least(2 * self.size + 1)
        self.table = [[] for _ in range(self.size)]
        self.entry_count = 0

        for chain in old_table:
            for entry in chain:
                self.insert(entry)

        self.rehash_count += 1

    def clear(self) -> None:
        """Drop all entries and reset the table to the default size."""
        self.size = self.DEFAULT_CAPACITY
        self.table = [[] for _ in range(self.size)]
        self.entry_count = 0
        self.rehash_count = 0

    def occupancy(self) -> List[int]:
        """Number of entries in each bucket."""
        return [len(chain) for chain in self.table]

    def __len__(self) -> int:
        return self.entry_count

    def __contains__(self, name: str) -> bool:
        return len(self.search(name)) > 0

    def __str__(self) -> str:
        return " ".join(str(value) for value in [self.size] + self.occupancy())

    def get_stats(self) -> dict:
        """
        Get statistics about the table layout.

        Returns:
            Dictionary with capacity, load factor and chain length figures
        """
        occupancy = self.occupancy()
        return {
            "capacity": self.size,
            "entries": self.entry_count,
            "load_factor": self.entry_count / self.size,
            "longest_chain": max(occupancy) if occupancy else 0,
            "empty_buckets": occupancy.count(0),
            "rehash_count": self.rehash_count,
        }
