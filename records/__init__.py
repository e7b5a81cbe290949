"""
StudentDir Records
==================
Record types owned by the directory.

Usage:
    from records import Student
"""

from records.student import Student

__all__ = ["Student"]
