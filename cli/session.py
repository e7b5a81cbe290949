"""
StudentDir Session
==================
Per-shell state object: owns one StudentDirectory and one CategoryGraph
and executes one command line at a time.

Commands:
  add NIM NAME IPK [TAG...]   insert a student
  find NIM                    exact lookup by NIM
  ipk VALUE                   exact lookup by IPK (may return many)
  delete NIM                  remove a student
  list                        all students, ascending IPK
  count                       number of students
  tag NIM TAG                 append a tag to a student
  import PATH [--header]      batch import nim,name,ipk rows
  sample                      load the bundled sample students
  check                       verify both indexes agree
  link A B                    connect two categories
  neighbors NAME              categories adjacent to NAME
  bfs START                   breadth-first order from START

Arguments are split with shlex, so quoted names may contain spaces.
"""

import logging
import math
import shlex
from typing import Any, Dict, List, Optional, Tuple

from directory.sample import load_sample
from directory.student_directory import StudentDirectory
from graph.category_graph import CategoryGraph
from ingest.csv_import import import_file

logger = logging.getLogger(__name__)

STUDENT_COLUMNS = ["nim", "name", "ipk", "tags"]

Result = Tuple[Optional[List[Dict[str, Any]]], str, Optional[List[str]]]


class SessionError(Exception):
    """Session-level error (bad usage, unparsable arguments, closed session)."""
    pass


class Session:
    """
    Shell session. Owns the directory and the category graph.

    Usage:
        with Session() as session:
            session.execute("add 1001 Alice 3.75")
            rows, message, columns = session.execute("list")
    """

    def __init__(self, directory: Optional[StudentDirectory] = None):
        self.directory = directory if directory is not None else StudentDirectory()
        self.graph = CategoryGraph()
        self._closed: bool = False

        self.stats = {
            "commands_executed": 0,
            "inserted": 0,
            "deleted": 0,
            "errors": 0,
        }

        self._commands = {
            "add": self._cmd_add,
            "find": self._cmd_find,
            "ipk": self._cmd_ipk,
            "delete": self._cmd_delete,
            "list": self._cmd_list,
            "count": self._cmd_count,
            "tag": self._cmd_tag,
            "import": self._cmd_import,
            "sample": self._cmd_sample,
            "check": self._cmd_check,
            "link": self._cmd_link,
            "neighbors": self._cmd_neighbors,
            "bfs": self._cmd_bfs,
        }

    # ─── Command Execution ──────────────────────────────────────────

    def execute(self, line: str) -> Result:
        """
        Execute one command line.

        Returns: (rows_or_None, message, column_names_or_None)
          - queries:   ([{...}, ...], "", [col_names])
          - mutations: (None, "Inserted.", None)
        """
        self._check_closed()
        self.stats["commands_executed"] += 1

        try:
            try:
                tokens = shlex.split(line)
            except ValueError as e:
                raise SessionError(f"Cannot parse command: {e}")
            if not tokens:
                return None, "", None

            name, args = tokens[0].lower(), tokens[1:]
            handler = self._commands.get(name)
            if handler is None:
                raise SessionError(f"Unknown command '{name}'. Type .help for commands.")
            return handler(args)
        except Exception:
            self.stats["errors"] += 1
            raise

    # ─── Student Commands ───────────────────────────────────────────

    def _cmd_add(self, args: List[str]) -> Result:
        if len(args) < 3:
            raise SessionError("Usage: add NIM NAME IPK [TAG...]")
        nim, name, ipk = args[0], args[1], self._parse_ipk(args[2])
        if not self.directory.insert_record(nim, name, ipk, args[3:]):
            return None, "NIM already exists.", None
        self.stats["inserted"] += 1
        return None, "Inserted.", None

    def _cmd_find(self, args: List[str]) -> Result:
        nim = self._single_arg(args, "find NIM")
        student = self.directory.find_by_id(nim)
        if student is None:
            return None, "Not found.", None
        return [student.to_dict()], "", STUDENT_COLUMNS

    def _cmd_ipk(self, args: List[str]) -> Result:
        ipk = self._parse_ipk(self._single_arg(args, "ipk VALUE"))
        students = self.directory.find_by_ranking(ipk)
        if not students:
            return None, "No student with that IPK.", None
        return [s.to_dict() for s in students], "", STUDENT_COLUMNS

    def _cmd_delete(self, args: List[str]) -> Result:
        nim = self._single_arg(args, "delete NIM")
        if not self.directory.delete_by_id(nim):
            return None, "NIM not found.", None
        self.stats["deleted"] += 1
        return None, "Deleted.", None

    def _cmd_list(self, args: List[str]) -> Result:
        students = self.directory.list_ordered_by_ranking()
        return [s.to_dict() for s in students], "", STUDENT_COLUMNS

    def _cmd_count(self, args: List[str]) -> Result:
        return None, f"Total students: {self.directory.count()}", None

    def _cmd_tag(self, args: List[str]) -> Result:
        if len(args) != 2:
            raise SessionError("Usage: tag NIM TAG")
        nim, tag = args
        if self.directory.find_by_id(nim) is None:
            return None, "NIM not found.", None
        if not self.directory.add_tag(nim, tag):
            return None, f"Tag '{tag}' already present.", None
        return None, "Tagged.", None

    def _cmd_import(self, args: List[str]) -> Result:
        has_header = "--header" in args
        paths = [a for a in args if a != "--header"]
        if len(paths) != 1:
            raise SessionError("Usage: import PATH [--header]")
        report = import_file(self.directory, paths[0], has_header=has_header)
        self.stats["inserted"] += report.imported
        return None, report.summary(), None

    def _cmd_sample(self, args: List[str]) -> Result:
        inserted = load_sample(self.directory)
        self.stats["inserted"] += inserted
        return None, f"Loaded {inserted} sample student(s).", None

    def _cmd_check(self, args: List[str]) -> Result:
        errors = self.directory.validate()
        if errors:
            logger.error("Index check failed with %d problem(s)", len(errors))
            return None, "\n".join(["Index check FAILED:"] + errors), None
        return None, f"Indexes consistent ({self.directory.count()} student(s)).", None

    # ─── Category Commands ──────────────────────────────────────────

    def _cmd_link(self, args: List[str]) -> Result:
        if len(args) != 2:
            raise SessionError("Usage: link A B")
        a, b = args
        if not self.graph.add_edge(a, b):
            return None, f"'{a}' and '{b}' are already linked.", None
        return None, f"Linked '{a}' -- '{b}'.", None

    def _cmd_neighbors(self, args: List[str]) -> Result:
        name = self._single_arg(args, "neighbors NAME")
        return [{"category": c} for c in self.graph.neighbors(name)], "", ["category"]

    def _cmd_bfs(self, args: List[str]) -> Result:
        start = self._single_arg(args, "bfs START")
        order = self.graph.bfs(start)
        rows = [{"step": i, "category": c} for i, c in enumerate(order, start=1)]
        return rows, "", ["step", "category"]

    # ─── Helpers ────────────────────────────────────────────────────

    def _single_arg(self, args: List[str], usage: str) -> str:
        if len(args) != 1:
            raise SessionError(f"Usage: {usage}")
        return args[0]

    def _parse_ipk(self, text: str) -> float:
        try:
            value = float(text)
        except ValueError:
            raise SessionError(f"Invalid IPK '{text}'")
        if math.isnan(value):
            raise SessionError(f"Invalid IPK '{text}'")
        return value

    def _check_closed(self):
        if self._closed:
            raise SessionError("Session is closed")

    # ─── Lifecycle ──────────────────────────────────────────────────

    def close(self) -> None:
        if self._closed:
            return
        logger.debug("Session closed after %d command(s)", self.stats["commands_executed"])
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
