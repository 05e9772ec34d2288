"""
A fixed-size Bloom filter over strings.
"""

import math
from typing import Iterable


class BloomFilter:
    """
    Bloom filter stored in a single integer bitmask.

    The filter is sized once for the items it is built from. A negative
    test proves absence; a positive test may be a false positive.
    """

    __slots__ = ('num_bits', 'num_hashes', '_bits')

    def __init__(self, items: Iterable[str], num_bits: int = 64):
        """
        Build a filter over the given items.

        Args:
            items: The strings to insert
            num_bits: Size of the bitmask
        """
        items = list(items)
        self.num_bits = num_bits
        self.num_hashes = self._optimal_hashes(num_bits, len(items))
        self._bits = 0
        for item in items:
            for index in self._indexes(item):
                self._bits |= 1 << index

    @staticmethod
    def _optimal_hashes(num_bits: int, num_items: int) -> int:
        if num_items == 0:
            return 1
        return max(1, round(num_bits / num_items * math.log(2)))

    def _indexes(self, item: str):
        # Double hashing: h1 + i * h2 over one 64-bit hash
        h = hash(item) & 0xFFFFFFFFFFFFFFFF
        h1 = h & 0xFFFFFFFF
        h2 = (h >> 32) | 1
        for i in range(self.num_hashes):
            yield (h1 + i * h2) % self.num_bits

    def __contains__(self, item: str) -> bool:
        bits = self._bits
        for index in self._indexes(item):
            if not bits >> index & 1:
                return False
        return True

    def contains(self, item: str) -> bool:
        return item in self

    def __repr__(self) -> str:
        return f"BloomFilter(bits={self._bits:#018x}, num_hashes={self.num_hashes})"
