"""
StudentDir Result Renderer
==========================
Formats command results for the shell.

Features:
  - Modes: table (aligned ASCII), vertical (one field per line), raw (pipes)
  - IPK values always shown with two decimals
  - Row count + elapsed time footer
  - Configurable: headers, timer, display limit
"""

import sys
import time
from typing import Any, Dict, List, Optional, TextIO

from config import DEFAULT_OUTPUT_MODE, IPK_DECIMALS, MAX_COL_WIDTH


class Renderer:
    """Result renderer with configurable display modes."""

    MODES = ("table", "vertical", "raw")

    def __init__(self, output: TextIO = None):
        self.output = output or sys.stdout
        self.mode: str = DEFAULT_OUTPUT_MODE
        self.show_headers: bool = True
        self.show_timer: bool = True
        self.display_limit: Optional[int] = None  # None = no limit
        self.max_col_width: int = MAX_COL_WIDTH

    # ─── Public API ─────────────────────────────────────────────────

    def render_rows(self, rows: List[Dict[str, Any]],
                    column_names: Optional[List[str]] = None,
                    elapsed: Optional[float] = None) -> int:
        """
        Render result rows. Returns the number of rows shown.
        `elapsed` is the command's run time; when omitted only render
        time is measured.
        """
        start = time.perf_counter()
        headers = column_names or (list(rows[0].keys()) if rows else [])
        shown = rows if self.display_limit is None else rows[:self.display_limit]

        if self.mode == "raw":
            self._render_raw(shown, headers)
        elif self.mode == "vertical":
            self._render_vertical(shown, headers)
        else:
            self._render_table(shown, headers)

        if len(shown) < len(rows):
            self._print(f"... (display limit {self.display_limit} reached)")

        if elapsed is None:
            elapsed = time.perf_counter() - start
        if self.show_timer:
            self._print(f"\n{len(rows)} row(s) ({elapsed:.3f}s)")
        else:
            self._print(f"\n{len(rows)} row(s)")
        return len(shown)

    def render_message(self, message: str):
        if message:
            self._print(message)

    def render_error(self, error: Exception):
        """Render an error with classification prefix."""
        prefix = self._classify_error(type(error).__name__)
        # str(KeyError) wraps its message in quotes
        detail = error.args[0] if isinstance(error, KeyError) and error.args else error
        self._print(f"{prefix}: {detail}")

    # ─── Table Mode ─────────────────────────────────────────────────

    def _render_table(self, rows: List[Dict[str, Any]], headers: List[str]):
        if not headers:
            return
        widths = {h: min(len(h), self.max_col_width) for h in headers}
        for row in rows:
            for h in headers:
                widths[h] = max(widths[h], min(len(self._format_value(h, row.get(h))),
                                               self.max_col_width))

        separator = "+" + "+".join("-" * (widths[h] + 2) for h in headers) + "+"
        if self.show_headers:
            self._print(separator)
            self._print(self._table_line(widths, headers, {h: h for h in headers}))
            self._print(separator)
        for row in rows:
            self._print(self._table_line(widths, headers, row))
        if self.show_headers and rows:
            self._print(separator)

    def _table_line(self, widths: Dict[str, int], headers: List[str],
                    row: Dict[str, Any]) -> str:
        parts = ["|"]
        for h in headers:
            raw = row.get(h)
            text = self._format_value(h, raw)
            if len(text) > self.max_col_width:
                text = text[:self.max_col_width - 3] + "..."
            w = widths[h]
            # numbers right-aligned
            if isinstance(raw, (int, float)) and not isinstance(raw, bool):
                parts.append(f" {text:>{w}} |")
            else:
                parts.append(f" {text:<{w}} |")
        return "".join(parts)

    # ─── Vertical / Raw Modes ───────────────────────────────────────

    def _render_vertical(self, rows: List[Dict[str, Any]], headers: List[str]):
        key_width = max((len(h) for h in headers), default=0)
        for n, row in enumerate(rows, start=1):
            self._print(f"*** Row {n} ***")
            for h in headers:
                self._print(f"  {h:>{key_width}}: {self._format_value(h, row.get(h))}")

    def _render_raw(self, rows: List[Dict[str, Any]], headers: List[str]):
        if self.show_headers and headers:
            self._print("|".join(headers))
        for row in rows:
            self._print("|".join(self._format_value(h, row.get(h)) for h in headers))

    # ─── Helpers ────────────────────────────────────────────────────

    def _format_value(self, column: str, value) -> str:
        if value is None:
            return ""
        if isinstance(value, float):
            if column == "ipk":
                return f"{value:.{IPK_DECIMALS}f}"
            return f"{value:.6g}"
        return str(value)

    def _classify_error(self, error_type: str) -> str:
        """Map error class name to user-friendly prefix."""
        mapping = {
            "SessionError": "UsageError",
            "FileNotFoundError": "ImportError",
            "PermissionError": "ImportError",
            "UnicodeDecodeError": "ImportError",
            "ValueError": "InputError",
            "KeyError": "NotFound",
            "KeyboardInterrupt": "Interrupted",
        }
        return mapping.get(error_type, f"Error[{error_type}]")

    def _print(self, text: str):
        print(text, file=self.output)
