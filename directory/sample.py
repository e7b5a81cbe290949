"""Sample data loader for demos and the `sample` shell command."""

from config import SAMPLE_STUDENTS
from directory.student_directory import StudentDirectory


def load_sample(directory: StudentDirectory) -> int:
    """Insert the bundled sample students. Returns how many were new."""
    inserted = 0
    for nim, name, ipk in SAMPLE_STUDENTS:
        if directory.insert_record(nim, name, ipk):
            inserted += 1
    return inserted
