"""
Hashing primitives shared by the name and phone directories.

Mathematical Foundation:
- Division hash: h0(k) = k mod M, with M prime to spread keys across buckets
- Multiplicative hash: h1(k) = floor(M * frac(k * phi)), phi = (sqrt(5) - 1) / 2
- Name keys use Horner's rule reduced mod M after every character
- Table sizes grow to the first prime >= 2M + 1 (Bertrand's postulate
  guarantees one exists below 2 * start)
"""

import math

# Fractional part of the golden ratio
PHI = (math.sqrt(5) - 1) / 2

# Radix used to fold characters of a name
NAME_RADIX = 255


def next_prime_at_least(start: int) -> int:
    """
    Find the smallest prime that is at least start.

    Args:
        start: Lower bound, expected to be greater than 10

    Returns:
        First prime in [start, 2 * start]
    """
    if start % 2 == 0:
        start += 1  # even candidates are never prime here

    for candidate in range(start, 2 * start + 1, 2):
        is_prime = True
        divisor = 3
        while divisor * divisor <= candidate:
            if candidate % divisor == 0:
                is_prime = False
                break
            divisor += 2
        if is_prime:
            return candidate

    raise ValueError(f"No prime found in [{start}, {2 * start}]")


def hash_mod(key: int, size: int) -> int:
    """Division hash used by the chaining table and cuckoo table 0."""
    return key % size


def hash_mult(key: int, size: int) -> int:
    """Golden-ratio multiplicative hash used by cuckoo table 1."""
    val = key * PHI
    return math.floor(size * (val - math.floor(val)))


def name_to_key(name: str, size: int) -> int:
    """
    Fold a name into a bucket index for a table of the given size.

    Horner's rule is evaluated in the reduced domain, so the result is
    already in [0, size) and changes whenever the table size changes.
    """
    key = 0
    for char in name:
        key = hash_mod(key * NAME_RADIX + ord(char), size)
    return key


def phone_to_key(phone: str) -> int:
    """
    Convert a "(AAA)EEE-LLLL" phone number to a base-10 integer key.

    The three digit groups are read from fixed offsets without validation.
    """
    return (
        int(phone[1:4]) * 10_000_000 + int(phone[5:8]) * 10_000 + int(phone[9:13])
    )
