"""
StudentDir Directory Package
============================
The coordinator that keeps the identity index and ranking tree in step,
plus sample data loading.

Usage:
    from directory import StudentDirectory, load_sample
"""

from directory.student_directory import StudentDirectory
from directory.sample import load_sample

__all__ = ["StudentDirectory", "load_sample"]
