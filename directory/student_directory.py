"""
StudentDir Directory
====================
Coordinator that owns the record set and both indexes:

  - IdentityIndex: NIM -> Student (exact lookup, source of truth for count)
  - RankingTree:   IPK -> [Student, ...] (exact IPK lookup, ordered listing)

Lock-step invariant: every student in the identity index sits in exactly
one ranking-tree bucket keyed by its IPK, and nothing else is in the tree.
Both indexes are private; every mutation goes through insert_record,
delete_by_id or add_tag.

Signalling: duplicate NIM -> False, unknown NIM -> None/False, no IPK
match -> []. Nothing here raises for those cases and nothing here logs.

Concurrency: single-threaded. An embedding service would wrap
insert_record/delete_by_id in one lock, since the map and the tree must
change together.
"""

import math
from typing import Iterable, List, Optional

from indexing.identity_index import IdentityIndex
from indexing.ranking_tree import RankingTree
from records.student import Student


class StudentDirectory:
    """
    Dual-index student store.

    Usage:
        d = StudentDirectory()
        d.insert_record("1001", "A", 3.75)
        d.find_by_id("1001")
        d.find_by_ranking(3.75)
        d.delete_by_id("1001")
    """

    def __init__(self):
        self._by_nim = IdentityIndex()
        self._by_ipk = RankingTree()

    # ─── Mutation ───────────────────────────────────────────────────

    def insert_record(self, nim: str, name: str, ipk: float,
                      tags: Optional[Iterable[str]] = None) -> bool:
        """
        Create and index a student. Returns False, touching nothing, when
        the NIM is already taken.
        """
        if math.isnan(ipk):
            raise ValueError(f"IPK for {nim} is NaN; NaN cannot be indexed")
        if nim in self._by_nim:
            return False

        student = Student(nim, name, ipk, list(tags or ()))
        self._by_nim.insert(nim, student)
        self._by_ipk.insert(student)
        return True

    def delete_by_id(self, nim: str) -> bool:
        """Remove a student from both indexes. False if the NIM is unknown."""
        student = self._by_nim.lookup(nim)
        if student is None:
            return False
        # the tree is keyed by IPK, so capture it before the record goes
        ipk = student.ipk
        self._by_nim.remove(nim)
        self._by_ipk.remove_record(nim, ipk)
        return True

    def add_tag(self, nim: str, tag: str) -> bool:
        """Append a tag to an existing student; duplicates are ignored."""
        student = self._by_nim.lookup(nim)
        if student is None:
            return False
        return student.add_tag(tag)

    # ─── Queries ────────────────────────────────────────────────────

    def find_by_id(self, nim: str) -> Optional[Student]:
        return self._by_nim.lookup(nim)

    def find_by_ranking(self, ipk: float) -> List[Student]:
        """Students whose IPK equals `ipk` exactly, in insertion order."""
        return self._by_ipk.find_exact(ipk)

    def list_ordered_by_ranking(self) -> List[Student]:
        return self._by_ipk.inorder()

    def count(self) -> int:
        return len(self._by_nim)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, nim: str) -> bool:
        return nim in self._by_nim

    # ─── Statistics / verification ──────────────────────────────────

    def stats(self) -> dict:
        """Shape of the indexes, for the shell's .stats view."""
        return {
            "students": self.count(),
            "distinct_ipk": self._by_ipk.node_count,
            "tree_height": self._by_ipk.height(),
        }

    def validate(self) -> List[str]:
        """
        Check both index invariants and that the indexes agree.
        Returns a list of error messages (empty = consistent).
        """
        errors = self._by_ipk.validate()
        in_tree = self._by_ipk.inorder()
        seen = set()
        for student in in_tree:
            if student.nim in seen:
                errors.append(f"Student {student.nim} appears twice in the tree")
            seen.add(student.nim)
            if self._by_nim.lookup(student.nim) is not student:
                errors.append(f"Student {student.nim} in tree but not in identity index")
        for nim in self._by_nim:
            if nim not in seen:
                errors.append(f"Student {nim} in identity index but not in tree")
        return errors
