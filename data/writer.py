import struct
import time
from pathlib import Path
from typing import Iterable, Tuple

FIELD_SEPARATOR = "\t"


def encode_entry(name: str, phone: str) -> bytes:
    """Encode a directory entry as a single UTF-8 record."""
    return f"{name}{FIELD_SEPARATOR}{phone}".encode("utf-8")


class EntryWriter:
    """Writes directory entries in binary format with cumulative position index."""

    def __init__(self, filepath: Path):
        self.filepath = Path(filepath)
        self.index_filepath = self.filepath.with_suffix(".idx")

    def write_entries(
        self, entries: Iterable[Tuple[str, str]], batch_size: int = 100_000
    ) -> int:
        """Write (name, phone) pairs and return how many were written."""
        print(f"Writing entries to {self.filepath}...")
        start_time = time.time()

        count = 0
        with (
            open(self.filepath, "wb") as data_file,
            open(self.index_filepath, "wb") as index_file,
        ):
            cumulative_position = 0
            batch = []

            for entry in entries:
                batch.append(encode_entry(*entry))
                count += 1

                if len(batch) >= batch_size:
                    cumulative_position = self._write_batch(
                        batch, data_file, index_file, cumulative_position
                    )
                    batch.clear()

                    if count % (batch_size * 10) == 0:
                        elapsed = time.time() - start_time
                        rate = count / elapsed if elapsed > 0 else 0
                        print(f"Wrote {count:,} entries - Rate: {rate:,.0f} entries/sec")

            # Write remaining batch
            if batch:
                self._write_batch(batch, data_file, index_file, cumulative_position)

        elapsed = time.time() - start_time
        print(f"Writing complete! {count:,} entries in {elapsed:.1f}s")
        return count

    def _write_batch(self, batch, data_file, index_file, start_position) -> int:
        """Write a batch of encoded records, returning the next position."""
        cumulative_position = start_position

        for record in batch:
            index_file.write(struct.pack("<Q", cumulative_position))
            data_file.write(record)
            cumulative_position += len(record)

        return cumulative_position
