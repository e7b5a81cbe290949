"""
StudentDir Identity Index
=========================
Exact-match index: NIM -> Student. Backed by a dict, O(1) average.

The index references records, it does not own them; keeping it in step
with the ranking tree is the directory's job.
"""

from typing import Dict, Iterator, Optional

from records.student import Student


class IdentityIndex:
    """Unique-key lookup structure keyed by NIM."""

    def __init__(self):
        self._entries: Dict[str, Student] = {}

    def insert(self, nim: str, student: Student) -> bool:
        """Store the mapping. Returns False (no mutation) if nim already exists."""
        if nim in self._entries:
            return False
        self._entries[nim] = student
        return True

    def lookup(self, nim: str) -> Optional[Student]:
        return self._entries.get(nim)

    def remove(self, nim: str) -> Optional[Student]:
        """Remove and return the record, or None if absent."""
        return self._entries.pop(nim, None)

    def __contains__(self, nim: str) -> bool:
        return nim in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))
