"""
StudentDir Interactive REPL
===========================
Interactive shell with studentdir> prompt.

Features:
  - One command per line (see cli.session for the command set)
  - Meta-commands (dot-prefixed) for display settings and statistics
  - Ctrl+C: cancel current line
  - Ctrl+D/EOF: exit
  - Persistent readline history (~/.studentdir_history)
"""

import logging
import os
import time
from typing import Optional

from cli.session import Session
from cli.renderer import Renderer
from config import HISTORY_FILE, HISTORY_MAX, PROMPT, VERSION

logger = logging.getLogger(__name__)

try:
    import readline
    _HAS_READLINE = True
except ImportError:
    _HAS_READLINE = False


def _load_history():
    if _HAS_READLINE and os.path.exists(HISTORY_FILE):
        try:
            readline.read_history_file(HISTORY_FILE)
        except OSError as e:
            logger.debug("Could not read history file: %s", e)


def _save_history():
    if _HAS_READLINE:
        try:
            readline.set_history_length(HISTORY_MAX)
            readline.write_history_file(HISTORY_FILE)
        except OSError as e:
            logger.debug("Could not write history file: %s", e)


# ─── REPL ───────────────────────────────────────────────────────────

class REPL:
    """
    Interactive StudentDir shell.

    Usage:
        repl = REPL()
        repl.run()
    """

    def __init__(self, session: Optional[Session] = None):
        self.session = session if session is not None else Session()
        self.renderer = Renderer()
        self._running = False

    def run(self):
        """Main REPL loop."""
        _load_history()
        self._running = True

        print(f"StudentDir v{VERSION}")
        print(f"Students loaded: {self.session.directory.count()}")
        print('Type ".help" for usage hints.')
        print()

        try:
            while self._running:
                try:
                    line = input(PROMPT)
                except KeyboardInterrupt:
                    print()
                    continue
                except EOFError:
                    print()
                    break

                stripped = line.strip()
                if not stripped:
                    continue
                if stripped.startswith("."):
                    self._handle_meta_command(stripped)
                    continue
                self.execute_line(stripped)
        finally:
            _save_history()
            self._shutdown()

    def execute_line(self, line: str) -> bool:
        """Run one command and render its result. Returns False on error."""
        start = time.perf_counter()
        try:
            rows, message, col_names = self.session.execute(line)
        except Exception as e:
            self.renderer.render_error(e)
            return False
        elapsed = time.perf_counter() - start

        if rows is not None:
            self.renderer.render_rows(rows, col_names, elapsed=elapsed)
        elif message:
            self.renderer.render_message(message)
        return True

    # ─── Meta-Commands ──────────────────────────────────────────────

    def _handle_meta_command(self, line: str):
        parts = line.split(None, 1)
        cmd = parts[0].lower()
        arg = parts[1].strip() if len(parts) > 1 else ""

        if cmd in (".quit", ".exit", ".q"):
            self._running = False
        elif cmd == ".help":
            self._cmd_help()
        elif cmd == ".mode":
            self._cmd_mode(arg)
        elif cmd == ".timer":
            self.renderer.show_timer = self._toggle("Timer", arg, self.renderer.show_timer)
        elif cmd == ".headers":
            self.renderer.show_headers = self._toggle("Headers", arg, self.renderer.show_headers)
        elif cmd == ".limit":
            self._cmd_limit(arg)
        elif cmd == ".stats":
            self._cmd_stats()
        else:
            print(f"Unknown command: {cmd}. Type .help for available commands.")

    def _cmd_help(self):
        print("""StudentDir Commands:
  add NIM NAME IPK [TAG...]  Insert a student (quote names with spaces)
  find NIM                   Look up a student by NIM
  ipk VALUE                  Students with exactly this IPK
  delete NIM                 Remove a student
  list                       All students, ascending IPK
  count                      Number of students
  tag NIM TAG                Add a tag to a student
  import PATH [--header]     Import nim,name,ipk[,tags] rows from a file
  sample                     Load the sample students
  check                      Verify the NIM and IPK indexes agree
  link A B                   Connect two categories
  neighbors NAME             Categories linked to NAME
  bfs START                  Breadth-first walk from START

Meta-Commands:
  .help                Show this help
  .mode table|vertical|raw  Set output mode (default: table)
  .timer on|off        Toggle timing display
  .headers on|off      Toggle column headers
  .limit N|off         Set display row limit
  .stats               Show session and index statistics
  .quit                Exit (aliases: .exit, .q)""")

    def _cmd_mode(self, arg: str):
        if arg.lower() in Renderer.MODES:
            self.renderer.mode = arg.lower()
            print(f"Output mode: {arg.lower()}")
        else:
            print(f"Usage: .mode {{{' | '.join(Renderer.MODES)}}}")
            print(f"Current: {self.renderer.mode}")

    def _toggle(self, label: str, arg: str, current: bool) -> bool:
        if arg.lower() in ("on", "1", "true"):
            current = True
        elif arg.lower() in ("off", "0", "false"):
            current = False
        else:
            print(f"{label} is {'ON' if current else 'OFF'}")
            return current
        print(f"{label} {'ON' if current else 'OFF'}")
        return current

    def _cmd_limit(self, arg: str):
        if arg.lower() in ("off", "none", "0"):
            self.renderer.display_limit = None
            print("Display limit OFF")
        elif arg.isdigit() and int(arg) > 0:
            self.renderer.display_limit = int(arg)
            print(f"Display limit: {arg} rows")
        else:
            current = self.renderer.display_limit or "OFF"
            print("Usage: .limit N | .limit off")
            print(f"Current: {current}")

    def _cmd_stats(self):
        s = self.session.stats
        shape = self.session.directory.stats()
        print("Session Statistics:")
        print(f"  Commands executed:  {s['commands_executed']}")
        print(f"  Students inserted:  {s['inserted']}")
        print(f"  Students deleted:   {s['deleted']}")
        print(f"  Errors:             {s['errors']}")
        print("Index Statistics:")
        print(f"  Students:           {shape['students']}")
        print(f"  Distinct IPKs:      {shape['distinct_ipk']}")
        print(f"  IPK tree height:    {shape['tree_height']}")
        print(f"  Categories:         {len(self.session.graph)}")

    def _shutdown(self):
        self.session.close()
        print("Goodbye.")
