"""
StudentDir Indexing Module
==========================
In-memory indexes over the student record set.

Components:
  - identity_index: NIM -> Student hash index
  - ranking_tree: IPK-keyed binary search tree with per-key buckets
"""

from indexing.identity_index import IdentityIndex
from indexing.ranking_tree import RankingNode, RankingTree

__all__ = ["IdentityIndex", "RankingNode", "RankingTree"]
