"""
StudentDir Category Graph
=========================
Undirected adjacency graph over category names (faculties, programmes,
interest tags...) with breadth-first traversal.

Independent of the student indexes: categories are plain strings and
nothing here touches a StudentDirectory.

Neighbor order is edge insertion order, so BFS output is deterministic.
"""

from collections import deque
from typing import Dict, List


class CategoryGraph:
    """
    Usage:
        g = CategoryGraph()
        g.add_edge("Science", "Informatics")
        g.add_edge("Science", "Mathematics")
        g.bfs("Science")   # -> ["Science", "Informatics", "Mathematics"]
    """

    def __init__(self):
        self._adjacency: Dict[str, List[str]] = {}

    def add_category(self, name: str) -> bool:
        """Add a vertex. Returns False if it already exists."""
        if name in self._adjacency:
            return False
        self._adjacency[name] = []
        return True

    def add_edge(self, a: str, b: str) -> bool:
        """
        Connect two categories, creating either if missing.
        Returns False for an edge that already exists.
        """
        if a == b:
            raise ValueError(f"Self-loop on category '{a}' is not allowed")
        self.add_category(a)
        self.add_category(b)
        if b in self._adjacency[a]:
            return False
        self._adjacency[a].append(b)
        self._adjacency[b].append(a)
        return True

    def neighbors(self, name: str) -> List[str]:
        if name not in self._adjacency:
            raise KeyError(f"Category '{name}' not found")
        return list(self._adjacency[name])

    def bfs(self, start: str) -> List[str]:
        """Breadth-first visit order from `start`, including `start`."""
        if start not in self._adjacency:
            raise KeyError(f"Category '{start}' not found")
        visited = {start}
        order: List[str] = []
        queue = deque([start])
        while queue:
            current = queue.popleft()
            order.append(current)
            for nxt in self._adjacency[current]:
                if nxt not in visited:
                    visited.add(nxt)
                    queue.append(nxt)
        return order

    def categories(self) -> List[str]:
        return list(self._adjacency)

    @property
    def edge_count(self) -> int:
        return sum(len(adj) for adj in self._adjacency.values()) // 2

    def __contains__(self, name: str) -> bool:
        return name in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)
