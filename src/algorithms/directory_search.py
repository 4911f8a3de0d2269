import time

from data.reader import EntryReader

from ..data_structures.name_directory import NameDirectory, NameEntry
from ..data_structures.phone_directory import (
    NOT_FOUND,
    PhoneDirectory,
    PhoneEntry,
)
from .algorithm import Algorithm, SearchResult


class PhoneLookup(Algorithm):
    """
    Phone -> name lookup backed by a cuckoo PhoneDirectory.

    Time Complexity: O(1) worst case lookup (two probes)
    Space Complexity: O(M) for two tables of size M
    """

    def __init__(self, reader: EntryReader):
        super().__init__(reader)
        self.directory = PhoneDirectory()
        self.build_time = 0.0

    def build(self) -> "PhoneLookup":
        """Insert every entry of the reader into a fresh directory."""
        start_time = time.perf_counter()
        self.directory.clear()
        for name, phone in self.reader:
            self.directory.insert(PhoneEntry(phone=phone, name=name))
        self.build_time = time.perf_counter() - start_time
        return self

    def search(self, target: str) -> SearchResult:
        """
        Find the owner of a phone number.

        Args:
            target: Phone number to search for

        Returns:
            A SearchResult whose index is the slot and whose additional_info
            holds the table id and owner name
        """
        if not self.validate_target(target):
            return SearchResult(found=False, index=-1, comparisons=0, time_taken=0.0)

        start_time = time.perf_counter()
        located = self.directory.locate(target)
        name = self.directory.search(target)
        time_taken = time.perf_counter() - start_time

        # A hit in table 0 needs one probe, anything else probes both tables
        comparisons = 1 if located is not None and located[0] == 0 else 2
        self._update_statistics(comparisons, time_taken)

        if located is None:
            return SearchResult(
                found=False,
                index=-1,
                comparisons=comparisons,
                time_taken=time_taken,
                hash_operations=2,
                additional_info={"name": NOT_FOUND},
            )

        table_id, slot = located
        return SearchResult(
            found=True,
            index=slot,
            comparisons=comparisons,
            time_taken=time_taken,
            hash_operations=table_id + 1,
            additional_info={"table": table_id, "name": name},
        )

    def get_algorithm_name(self) -> str:
        return "PhoneLookup"


class NameLookup(Algorithm):
    """
    Name -> phones lookup backed by a chaining NameDirectory.

    The directory is rehashed whenever its load factor exceeds max_load_factor
    while building, since the directory itself never grows on insert.

    Time Complexity: O(1 + chain length) per lookup
    Space Complexity: O(M + n)
    """

    def __init__(self, reader: EntryReader, max_load_factor: float = 1.0):
        if max_load_factor <= 0:
            raise ValueError("Max load factor must be positive")
        super().__init__(reader)
        self.directory = NameDirectory()
        self.max_load_factor = max_load_factor
        self.build_time = 0.0

    def build(self) -> "NameLookup":
        """Insert every entry of the reader into a fresh directory."""
        start_time = time.perf_counter()
        self.directory.clear()
        for name, phone in self.reader:
            self.directory.insert(NameEntry(name=name, phone=phone))
            if len(self.directory) > self.max_load_factor * self.directory.capacity:
                self.directory.rehash()
        self.build_time = time.perf_counter() - start_time
        return self

    def search(self, target: str) -> SearchResult:
        """
        Find every phone registered under a name.

        Args:
            target: Name to search for

        Returns:
            A SearchResult whose index is the bucket, whose comparisons is the
            chain length and whose additional_info holds the phones
        """
        if not self.validate_target(target):
            return SearchResult(found=False, index=-1, comparisons=0, time_taken=0.0)

        start_time = time.perf_counter()
        bucket = self.directory.bucket_for(target)
        phones = self.directory.search(target)
        time_taken = time.perf_counter() - start_time

        comparisons = len(self.directory.table[bucket])
        self._update_statistics(comparisons, time_taken)

        return SearchResult(
            found=len(phones) > 0,
            index=bucket if phones else -1,
            comparisons=comparisons,
            time_taken=time_taken,
            hash_operations=1,
            additional_info={"phones": phones},
        )

    def get_algorithm_name(self) -> str:
        return "NameLookup"
