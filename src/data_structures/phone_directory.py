"""
Mathematical Foundation:
- Two tables of equal prime size M, one hash function each
- Table 0 slot: h0(k) = k mod M; table 1 slot: h1(k) = floor(M * frac(k * phi))
- Lookup probes at most two slots, so search is O(1) in the worst case
- Insertion kicks occupants to their alternate table; after M + 1 kicks
  without finding an empty slot both tables grow to the next prime >= 2M + 1
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .hashing import hash_mod, hash_mult, next_prime_at_least, phone_to_key

NOT_FOUND = "not found"


@dataclass(frozen=True)
class PhoneEntry:
    """The owner of a phone number."""

    phone: str
    name: str


class PhoneDirectory:
    """
    Cuckoo hash table pair keyed by phone number.

    Both tables share a single size so their hash domains stay consistent.
    Re-inserting a phone number that is already stored is not deduplicated:
    the older entry is kicked into the other table like any collision.
    """

    DEFAULT_CAPACITY = 11

    def __init__(self, size: int = DEFAULT_CAPACITY):
        """
        Initialize an empty directory.

        Args:
            size: Initial size of each of the two tables (M)
        """
        if size <= 0:
            raise ValueError("Capacity must be positive")

        self.size = size
        self.tables: Tuple[List[Optional[PhoneEntry]], ...] = (
            [None] * size,
            [None] * size,
        )
        self.entry_count = 0

        # Statistics
        self.rehash_count = 0
        self.total_kicks = 0

    @property
    def capacity(self) -> int:
        return self.size

    def _slot(self, table_id: int, key: int) -> int:
        """Slot of key in the given table for the current size."""
        if table_id == 0:
            return hash_mod(key, self.size)
        return hash_mult(key, self.size)

    def _place(self, entry: PhoneEntry) -> Optional[PhoneEntry]:
        """
        Run the eviction chain for entry, starting at table 0.

        Returns:
            None if every entry found a home, otherwise the entry left
            without a slot after M + 1 displacements
        """
        table_id = 0
        for _ in range(self.size + 1):
            table = self.tables[table_id]
            slot = self._slot(table_id, phone_to_key(entry.phone))

            evicted = table[slot]
            table[slot] = entry
            if evicted is None:
                return None

            self.total_kicks += 1
            entry = evicted
            table_id = 1 - table_id

        return entry

    def insert(self, entry: PhoneEntry) -> None:
        """
        Insert an entry using cuckoo hashing.

        Grows both tables and retries whenever the eviction chain runs
        longer than M + 1 steps.

        Args:
            entry: The phone/name pair to store
        """
        self.entry_count += 1

        homeless = self._place(entry)
        while homeless is not None:
            # rehash() recounts only stored entries; homeless is still pending
            self.rehash()
            self.entry_count += 1
            homeless = self._place(homeless)

    def search(self, phone: str) -> str:
        """
        Find the owner of a phone number.

        Args:
            phone: Phone number in "(AAA)EEE-LLLL" form

        Returns:
            The owner's name, or NOT_FOUND
        """
        located = self.locate(phone)
        if located is None:
            return NOT_FOUND
        table_id, slot = located
        entry = self.tables[table_id][slot]
        assert entry is not None
        return entry.name

    def locate(self, phone: str) -> Optional[Tuple[int, int]]:
        """
        Find where a phone number is stored.

        Returns:
            (table_id, slot) of the reachable entry, or None if absent
        """
        key = phone_to_key(phone)
        for table_id in (0, 1):
            slot = self._slot(table_id, key)
            entry = self.tables[table_id][slot]
            if entry is not None and entry.phone == phone:
                return table_id, slot
        return None

    def rehash(self) -> None:
        """Grow both tables to the next prime >= 2M + 1 and reinsert everything."""
        old_tables = self.tables
        self.size = next_prime_at_least(2 * self.size + 1)
        self.tables = ([None] * self.size, [None] * self.size)
        self.entry_count = 0
        self.rehash_count += 1

        for table in old_tables:
            for entry in table:
                if entry is not None:
                    self.insert(entry)

    def clear(self) -> None:
        """Drop all entries and reset both tables to the default size."""
        self.size = self.DEFAULT_CAPACITY
        self.tables = ([None] * self.size, [None] * self.size)
        self.entry_count = 0
        self.rehash_count = 0
        self.total_kicks = 0

    def occupancy(self, table_id: int) -> List[int]:
        """1 for each occupied slot of a table, 0 for each empty one."""
        return [0 if entry is None else 1 for entry in self.tables[table_id]]

    def __len__(self) -> int:
        return self.entry_count

    def __contains__(self, phone: str) -> bool:
        return self.locate(phone) is not None

    def __str__(self) -> str:
        values = [self.size] + self.occupancy(0) + self.occupancy(1)
        return " ".join(str(value) for value in values)

    def get_stats(self) -> dict:
        """
        Get statistics about both tables.

        Returns:
            Dictionary with capacity, load factor, occupancy and kick counts
        """
        table0_used = sum(self.occupancy(0))
        table1_used = sum(self.occupancy(1))
        return {
            "capacity": self.size,
            "entries": self.entry_count,
            "total_slots": 2 * self.size,
            "load_factor": self.entry_count / (2 * self.size),
            "table0_used": table0_used,
            "table1_used": table1_used,
            "rehash_count": self.rehash_count,
            "total_kicks": self.total_kicks,
            "avg_kicks_per_insert": self.total_kicks / max(1, self.entry_count),
        }


if __name__ == "__main__":
    print("Phone Directory Example")
    print("=" * 50)

    directory = PhoneDirectory()
    numbers = [f"(555){100 + i:03d}-{1000 + 37 * i:04d}" for i in range(30)]
    for i, number in enumerate(numbers):
        directory.insert(PhoneEntry(phone=number, name=f"user_{i}"))

    print(f"Stored {len(directory)} numbers in tables of size {directory.capacity}")
    print(f"\n{numbers[7]!r} -> {directory.search(numbers[7])}")
    print(f"'(555)999-9999' -> {directory.search('(555)999-9999')}")

    stats = directory.get_stats()
    print("\nDirectory Statistics:")
    print(f"  Load factor: {stats['load_factor']:.4f}")
    print(f"  Rehashes: {stats['rehash_count']}")
    print(f"  Total kicks: {stats['total_kicks']}")
    print(f"  Avg kicks per insert: {stats['avg_kicks_per_insert']:.2f}")
