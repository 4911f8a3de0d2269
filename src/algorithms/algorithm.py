from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class SearchResult:
    """
    Result of a lookup operation.

    Attributes:
        found: Whether the key was found
        index: Record, slot or bucket index of the match, -1 otherwise
        comparisons: Number of entries compared against the key
        time_taken: Time taken for the search in seconds
        hash_operations: Number of hash functions evaluated
        additional_info: Any additional algorithm-specific information
    """

    found: bool
    index: int
    comparisons: int
    time_taken: float
    hash_operations: int = 0
    additional_info: Optional[dict] = None


class Algorithm(ABC):
    """
    Abstract base class for directory lookup algorithms.

    Every algorithm answers lookups over the entries exposed by a reader.
    """

    def __init__(self, reader):
        """
        Initialize the algorithm with a reader.

        Args:
            reader: A reader object that provides (name, phone) pairs.
                   Expected to support __getitem__, __len__ and iteration.
        """
        self.reader = reader
        self.total_comparisons = 0
        self.total_searches = 0
        self.total_time = 0.0

    @abstractmethod
    def search(self, target: str) -> SearchResult:
        """
        Look up the target key.

        Args:
            target: The name or phone number to search for

        Returns:
            A SearchResult object containing the search outcome
        """
        pass

    @abstractmethod
    def get_algorithm_name(self) -> str:
        pass

    def validate_target(self, target: str) -> bool:
        """
        Validate that the target is a non-empty string.

        Args:
            target: The key to validate

        Returns:
            True if target is valid, False otherwise
        """
        return isinstance(target, str) and len(target.strip()) > 0

    def _update_statistics(self, comparisons: int, time_taken: float) -> None:
        self.total_comparisons += comparisons
        self.total_searches += 1
        self.total_time += time_taken

    def get_performance_stats(self) -> dict:
        """
        Get performance statistics for all searches performed.

        Returns:
            Dictionary containing performance metrics
        """
        if self.total_searches == 0:
            return {
                "total_searches": 0,
                "total_comparisons": 0,
                "total_time": 0.0,
                "avg_comparisons": 0.0,
                "avg_time": 0.0,
            }

        return {
            "total_searches": self.total_searches,
            "total_comparisons": self.total_comparisons,
            "total_time": self.total_time,
            "avg_comparisons": self.total_comparisons / self.total_searches,
            "avg_time": self.total_time / self.total_searches,
        }

    def reset_statistics(self) -> None:
        """Reset all performance statistics."""
        self.total_comparisons = 0
        self.total_searches = 0
        self.total_time = 0.0

    def __str__(self) -> str:
        return f"{self.get_algorithm_name()}"
