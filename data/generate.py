import time
from pathlib import Path
from typing import Iterator, Optional, Tuple

from mimesis import Person
from mimesis.locales import Locale

from data.writer import EntryWriter

PHONE_MASK = "(###)###-####"


class EntryGenerator:
    """Generates (name, phone) directory entries using mimesis."""

    def __init__(self, locale: Locale = Locale.EN, seed: Optional[int] = None):
        self.person = Person(locale=locale, seed=seed)
        self._issued_phones: set[str] = set()

    def generate_phone(self) -> str:
        """Generate a phone number that this generator has not issued before."""
        while True:
            phone = self.person.phone_number(mask=PHONE_MASK)
            if phone not in self._issued_phones:
                self._issued_phones.add(phone)
                return phone

    def generate_entry(self) -> Tuple[str, str]:
        """Generate a single entry; names may repeat, phones never do."""
        return self.person.first_name(), self.generate_phone()

    def generate_batch(self, count: int) -> Iterator[Tuple[str, str]]:
        """Generate a batch of entries."""
        for _ in range(count):
            yield self.generate_entry()


class EfficientEntryStorage:
    """Stores generated entries through EntryWriter in batches."""

    def __init__(self, filepath: Path):
        self.filepath = Path(filepath)
        self.index_filepath = self.filepath.with_suffix(".idx")

    def store_entries(
        self, generator: EntryGenerator, total_count: int, batch_size: int = 100_000
    ) -> None:
        """Generate total_count entries and write them to disk."""
        print(f"Generating {total_count:,} entries...")
        start_time = time.time()

        def entries():
            for batch_start in range(0, total_count, batch_size):
                batch_end = min(batch_start + batch_size, total_count)
                yield from generator.generate_batch(batch_end - batch_start)

        written = EntryWriter(self.filepath).write_entries(entries(), batch_size)

        elapsed = time.time() - start_time
        rate = written / elapsed if elapsed > 0 else 0
        print(
            f"Generation complete! {written:,} entries in {elapsed:.1f}s "
            f"({rate:,.0f} entries/sec)"
        )

        data_size = self.filepath.stat().st_size
        index_size = self.index_filepath.stat().st_size
        print(f"Data file: {data_size:,} bytes ({data_size / 1024**2:.2f} MB)")
        print(f"Index file: {index_size:,} bytes ({index_size / 1024**2:.2f} MB)")


def main():
    """Generate a directory dataset for benchmarking."""

    # Configuration
    TOTAL_ENTRIES = 1_000_000
    BATCH_SIZE = 100_000
    SEED = 42  # For reproducible results

    data_dir = Path(__file__).parent
    output_file = data_dir / "entries.dat"

    generator = EntryGenerator(locale=Locale.EN, seed=SEED)
    storage = EfficientEntryStorage(output_file)

    if output_file.exists():
        response = input(f"Output file {output_file} exists. Overwrite? (y/N): ")
        if response.lower() != "y":
            print("Aborted.")
            return

    try:
        storage.store_entries(generator, TOTAL_ENTRIES, BATCH_SIZE)
        print("Entry generation completed successfully!")

    except KeyboardInterrupt:
        print("\nGeneration interrupted by user.")
    except Exception as e:
        print(f"Error during generation: {e}")
        raise


if __name__ == "__main__":
    main()
