import time

from data.reader import EntryReader

from .algorithm import Algorithm, SearchResult

FIELDS = ("name", "phone")


class LinearSearch(Algorithm):
    """
    Linear scan over the raw entry dataset.

    Baseline for the hashed directories: every record is read and compared.

    Time Complexity: O(n) - worst case, best case O(1), average case O(n/2)
    Space Complexity: O(1) - constant extra space
    """

    def __init__(self, reader: EntryReader, field: str = "phone"):
        """
        Initialize the Linear Search instance.

        Args:
            reader: EntryReader instance to search through
            field: Which entry field to match, "name" or "phone"
        """
        if field not in FIELDS:
            raise ValueError(f"Field must be one of {FIELDS}")
        super().__init__(reader)
        self.field = field
        self._field_index = FIELDS.index(field)

    def search(self, target: str) -> SearchResult:
        """
        Find the first record whose field equals target.

        Args:
            target: Name or phone number to search for

        Returns:
            A SearchResult object; additional_info holds the matching entry
        """
        if not self.validate_target(target):
            return SearchResult(found=False, index=-1, comparisons=0, time_taken=0.0)
        if not self.reader or len(self.reader) == 0:
            raise ValueError("Reader cannot be None or empty")

        start_time = time.perf_counter()
        comparisons = 0

        for i in range(len(self.reader)):
            comparisons += 1
            entry = self.reader[i]
            if entry[self._field_index] == target:
                time_taken = time.perf_counter() - start_time
                self._update_statistics(comparisons, time_taken)
                return SearchResult(
                    found=True,
                    index=i,
                    comparisons=comparisons,
                    time_taken=time_taken,
                    additional_info={"name": entry[0], "phone": entry[1]},
                )

        time_taken = time.perf_counter() - start_time
        self._update_statistics(comparisons, time_taken)

        return SearchResult(
            found=False, index=-1, comparisons=comparisons, time_taken=time_taken
        )

    def get_algorithm_name(self) -> str:
        return "LinearSearch"
