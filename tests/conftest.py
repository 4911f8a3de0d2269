"""
Pytest configuration and fixtures for PhoneDirectory tests.

This file contains shared fixtures and configuration for all test modules.
"""

import random
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def phone_from_key(key: int) -> str:
    """Render an integer key back into "(AAA)EEE-LLLL" form."""
    return f"({key // 10_000_000:03d}){key // 10_000 % 1000:03d}-{key % 10_000:04d}"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for a single test."""
    temp_dir = tempfile.mkdtemp(prefix="phonedirectory_test_")
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def sample_entries():
    """Provide a consistent set of (name, phone) pairs for testing."""
    return [
        ("Ann", "(555)111-0002"),
        ("Bob", "(555)222-0001"),
        ("Ann", "(555)111-0001"),
        ("Cleo", "(416)555-0199"),
        ("Dev", "(212)867-5309"),
        ("Bob", "(310)222-0001"),
        ("Eve", "(604)123-4567"),
    ]


@pytest.fixture
def small_entry_dataset(temp_dir, sample_entries):
    """Write the sample entries to a dataset file and return its path."""
    from data.writer import EntryWriter

    filepath = temp_dir / "small_dataset.dat"
    EntryWriter(filepath).write_entries(iter(sample_entries), batch_size=3)
    return filepath


@pytest.fixture
def random_phones():
    """Five hundred distinct phones drawn with a fixed seed."""
    rng = random.Random(42)
    return [phone_from_key(key) for key in rng.sample(range(10**10), 500)]


@pytest.fixture
def crowded_phones():
    """
    Twelve distinct phones that share hash_mod(key, 11) and fall into at most
    two hash_mult(key, 11) slots, so a size-11 cuckoo table cannot hold them.

    Consecutive keys differ by 11 * 987; 987 is a Fibonacci number, so each
    step moves frac(key * phi) by only about -0.005.
    """
    base = 5_551_110_000
    return [phone_from_key(base + 11 * 987 * i) for i in range(12)]


# Configure pytest markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)

        if any(keyword in item.nodeid for keyword in ["large", "stress"]):
            item.add_marker(pytest.mark.slow)

        if not any(
            marker.name in ["integration", "slow"] for marker in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-slow", action="store_true", default=False, help="run slow tests"
    )


def pytest_runtest_setup(item):
    """Skip slow tests unless --run-slow is passed."""
    if "slow" in item.keywords and not item.config.getoption("--run-slow"):
        pytest.skip("need --run-slow option to run")
