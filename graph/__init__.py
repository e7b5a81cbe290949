"""
StudentDir Graph Package
========================
Companion category graph with BFS; independent of the student indexes.
"""

from graph.category_graph import CategoryGraph

__all__ = ["CategoryGraph"]
