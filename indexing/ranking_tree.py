"""
StudentDir Ranking Tree
=======================
Unbalanced binary search tree keyed by IPK. Each node holds a bucket:
every student whose IPK compares exactly equal to the node key, in
insertion order.

Invariants:
  - left subtree keys < node key < right subtree keys (strict)
  - buckets are never empty; an emptied bucket deletes its node
  - an equal key always lands in the existing bucket, never a new node

Key comparison is plain float ==, so 0.0 and -0.0 share a bucket while
two values that differ in their last bit (e.g. 0.1 + 0.2 vs 0.3) do not.

No rebalancing: sorted insertion degrades the tree to a chain and
search/traversal to O(n). All walks are iterative so a chain deeper
than the interpreter's recursion limit is still safe.

Node deletion follows the textbook recipe. A node with at most one
child is replaced by that child; a node with two children takes the key
and bucket of its in-order successor, which is then deleted from the
right subtree. Every delete step returns the new subtree root.
"""

from typing import List, Optional

from records.student import Student


class RankingNode:
    """One tree node: an IPK key plus its bucket of students."""
    __slots__ = ('key', 'bucket', 'left', 'right')

    def __init__(self, student: Student):
        self.key: float = student.ipk
        self.bucket: List[Student] = [student]
        self.left: Optional['RankingNode'] = None
        self.right: Optional['RankingNode'] = None


class RankingTree:
    """
    Multimap BST over IPK.

    Usage:
        tree = RankingTree()
        tree.insert(student)
        tree.find_exact(3.75)          # -> [students with IPK 3.75]
        tree.remove_record("1001", 3.75)
        tree.inorder()                 # -> all students, ascending IPK
    """

    def __init__(self):
        self._root: Optional[RankingNode] = None
        self._node_count: int = 0

    @property
    def node_count(self) -> int:
        """Number of distinct IPK keys currently in the tree."""
        return self._node_count

    def __len__(self) -> int:
        return sum(len(node.bucket) for node in self._walk())

    # ─── Insert ─────────────────────────────────────────────────────

    def insert(self, student: Student) -> None:
        """Append to the bucket with an equal key, or hang a new leaf."""
        key = student.ipk
        if self._root is None:
            self._root = RankingNode(student)
            self._node_count += 1
            return

        node = self._root
        while True:
            if key == node.key:
                node.bucket.append(student)
                return
            if key < node.key:
                if node.left is None:
                    node.left = RankingNode(student)
                    break
                node = node.left
            else:
                if node.right is None:
                    node.right = RankingNode(student)
                    break
                node = node.right
        self._node_count += 1

    # ─── Search ─────────────────────────────────────────────────────

    def find_exact(self, ipk: float) -> List[Student]:
        """Copy of the bucket for exactly `ipk`; empty list if none."""
        node = self._find_node(ipk)
        return [] if node is None else list(node.bucket)

    def _find_node(self, key: float) -> Optional[RankingNode]:
        node = self._root
        while node is not None:
            if key == node.key:
                return node
            node = node.left if key < node.key else node.right
        return None

    # ─── Delete ─────────────────────────────────────────────────────

    def remove_record(self, nim: str, ipk: float) -> None:
        """
        Drop the student `nim` from the bucket keyed `ipk`.
        No-op if the key or the student is absent. Deletes the node when
        its bucket empties.
        """
        node = self._find_node(ipk)
        if node is None:
            return
        for i, student in enumerate(node.bucket):
            if student.nim == nim:
                del node.bucket[i]
                break
        if not node.bucket:
            self._root = self._delete(self._root, node.key)
            self._node_count -= 1

    def _delete(self, root: Optional[RankingNode], key: float) -> Optional[RankingNode]:
        """Delete the node keyed `key` under `root`; return the new subtree root."""
        parent = None
        node = root
        while node is not None and key != node.key:
            parent = node
            node = node.left if key < node.key else node.right
        if node is None:
            return root

        replacement = self._splice(node)
        if parent is None:
            return replacement
        if parent.left is node:
            parent.left = replacement
        else:
            parent.right = replacement
        return root

    def _splice(self, node: RankingNode) -> Optional[RankingNode]:
        """Remove `node` from its position; return what takes its place."""
        if node.left is None:
            return node.right
        if node.right is None:
            return node.left

        successor = node.right
        while successor.left is not None:
            successor = successor.left
        node.key = successor.key
        node.bucket = successor.bucket
        # successor has no left child, so this splice does not recurse again
        node.right = self._delete(node.right, successor.key)
        return node

    # ─── Traversal ──────────────────────────────────────────────────

    def inorder(self) -> List[Student]:
        """All students, ascending IPK, ties in insertion order. Fresh list."""
        out: List[Student] = []
        for node in self._walk():
            out.extend(node.bucket)
        return out

    def _walk(self) -> List[RankingNode]:
        """Nodes in key order (explicit stack instead of recursion)."""
        nodes: List[RankingNode] = []
        stack: List[RankingNode] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            nodes.append(node)
            node = node.right
        return nodes

    def height(self) -> int:
        """Longest root-to-leaf path in nodes: 0 when empty, 1 for a lone root."""
        if self._root is None:
            return 0
        best = 0
        stack = [(self._root, 1)]
        while stack:
            node, depth = stack.pop()
            best = max(best, depth)
            if node.left is not None:
                stack.append((node.left, depth + 1))
            if node.right is not None:
                stack.append((node.right, depth + 1))
        return best

    # ─── Verification ───────────────────────────────────────────────

    def validate(self) -> List[str]:
        """
        Check the search-order and bucket invariants.
        Returns a list of error messages (empty = valid).
        """
        errors: List[str] = []
        previous = None
        nodes = self._walk()
        for node in nodes:
            if previous is not None and not previous < node.key:
                errors.append(f"Key {node.key!r} out of order after {previous!r}")
            if not node.bucket:
                errors.append(f"Empty bucket at key {node.key!r}")
            for student in node.bucket:
                if student.ipk != node.key:
                    errors.append(
                        f"Student {student.nim} (IPK {student.ipk!r}) "
                        f"in bucket {node.key!r}"
                    )
            previous = node.key
        if len(nodes) != self._node_count:
            errors.append(f"Node count {self._node_count} but {len(nodes)} reachable")
        return errors
