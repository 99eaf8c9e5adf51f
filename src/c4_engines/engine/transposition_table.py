"""
Transposition table for caching alpha-beta search results.

Positions are keyed by the exact encoding of all 42 cells (see
`board_key`), so there are no hash collisions to detect. An entry records
the remaining depth it was searched to and the resulting score; a probe at a
deeper remaining depth than the stored one is a miss.

The table belongs to a single root search: a board key does not encode whose
perspective the score was computed from, so the engine clears the table at
the start of every call.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class TTEntry:
    """
    Transposition table entry storing a cached search result.

    Attributes:
        depth: Remaining search depth when this entry was stored
        score: Minimax score from the root player's perspective
    """
    depth: int
    score: float


class TranspositionTable:
    """Dictionary-backed transposition table with hit/miss statistics."""

    def __init__(self):
        self.table: dict[bytes, TTEntry] = {}

        # Statistics
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def __len__(self):
        return len(self.table)

    def probe(self, key: bytes, depth: int) -> Optional[float]:
        """
        Return the cached score if an entry exists with stored depth >= `depth`.

        Args:
            key: Exact board encoding
            depth: Remaining depth requested by the caller

        Returns:
            Cached score, or None on a miss
        """
        entry = self.table.get(key)
        if entry is None or entry.depth < depth:
            self.misses += 1
            return None

        self.hits += 1
        return entry.score

    def store(self, key: bytes, depth: int, score: float):
        self.table[key] = TTEntry(depth=depth, score=score)
        self.stores += 1

    def clear(self):
        """Clear all entries and statistics (called at the start of every search)."""
        self.table.clear()
        self._reset_stats()

    def _reset_stats(self):
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def get_stats(self) -> dict:
        """
        Get transposition table statistics.

        Returns:
            Dictionary with hits, misses, hit rate, stores and size
        """
        total_queries = self.hits + self.misses
        hit_rate = self.hits / total_queries if total_queries > 0 else 0.0

        return {
            'hits': self.hits,
            'misses': self.misses,
            'hit_rate': hit_rate,
            'stores': self.stores,
            'size_entries': len(self.table),
        }
