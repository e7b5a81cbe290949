"""
StudentDir Configuration
========================
Module-level settings shared by the shell, the importer and main.py.
"""

import os

# ─── Shell ──────────────────────────────────────────────────────────
VERSION = "0.3.0"
PROMPT = "studentdir> "
HISTORY_FILE = os.path.expanduser("~/.studentdir_history")
HISTORY_MAX = 1000

# ─── Rendering ──────────────────────────────────────────────────────
DEFAULT_OUTPUT_MODE = "table"   # table, vertical, raw
MAX_COL_WIDTH = 50
IPK_DECIMALS = 2

# ─── Import ─────────────────────────────────────────────────────────
DEFAULT_DELIMITER = ","
TAG_SEPARATOR = ";"
COMMENT_PREFIX = "#"

# ─── Logging ────────────────────────────────────────────────────────
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LOG_LEVEL = "WARNING"

# (nim, name, ipk) rows loaded by the `sample` command / --sample flag
SAMPLE_STUDENTS = [
    ("20231001", "Alice", 3.75),
    ("20231002", "Bob", 3.50),
    ("20231003", "Charlie", 3.75),
    ("20231004", "Dina", 3.90),
    ("20231005", "Eko", 3.20),
    ("20231006", "Fani", 3.50),
    ("20231007", "Gina", 3.10),
    ("20231008", "Hadi", 3.90),
    ("20231009", "Ika", 2.95),
    ("20231010", "Joko", 3.40),
]
