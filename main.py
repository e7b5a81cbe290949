"""
StudentDir: Student Directory with NIM and IPK Indexes
=======================================================
Entry point for the shell.

Usage:
    python main.py [options]

Options:
    --help              Show help
    --sample            Preload the sample students
    --import PATH       Import nim,name,ipk rows before starting
    --execute CMD       Execute a single command and exit
    --file PATH         Execute a command script and exit
    --log-level LEVEL   DEBUG, INFO, WARNING (default), ERROR

Default:
    Interactive REPL mode with an empty directory
"""

import logging
import os
import sys

from config import DEFAULT_LOG_LEVEL, LOG_FORMAT


def print_help():
    print("""
StudentDir: Student Directory with NIM and IPK Indexes

Usage:
    python main.py                              Interactive REPL
    python main.py --execute "list" --sample    Execute single command
    python main.py --file commands.txt          Execute command script

Options:
    --help              Show this help
    --sample            Preload the sample students
    --import PATH       Import nim,name,ipk[,tags] rows before running
    --execute CMD       Execute command and exit
    --file PATH         Execute command script and exit
    --log-level LEVEL   Logging level (default: WARNING)

Type .help inside the REPL for the command reference.
""")


def configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def build_session(sample: bool = False, import_path: str = None):
    """Create a Session, optionally preloaded. Import errors exit with status 1."""
    from cli.session import Session
    from directory.sample import load_sample
    from ingest.csv_import import import_file

    session = Session()
    if sample:
        load_sample(session.directory)
    if import_path:
        try:
            report = import_file(session.directory, import_path)
        except OSError as e:
            print(f"Error: cannot import {import_path}: {e}", file=sys.stderr)
            sys.exit(1)
        print(report.summary(), file=sys.stderr)
    return session


def execute_single(session, command: str):
    """Execute a single command and exit."""
    from cli.repl import REPL

    repl = REPL(session)
    repl.renderer.show_timer = False
    with session:
        if not repl.execute_line(command):
            sys.exit(1)


def execute_script(session, script_path: str):
    """
    Execute a command script and exit.

    One command per line; blank lines and '#' comments are skipped.
    Meta-commands are not supported. Errors stop execution.
    """
    from cli.repl import REPL

    if not os.path.isfile(script_path):
        print(f"Error: script file not found: {script_path}", file=sys.stderr)
        sys.exit(1)

    with open(script_path, "r", encoding="utf-8") as f:
        lines = f.read().splitlines()

    repl = REPL(session)
    repl.renderer.show_timer = False  # Cleaner script output

    with session:
        for line_no, line in enumerate(lines, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if stripped.startswith("."):
                print(f"# meta-command not supported in script mode: {stripped}",
                      file=sys.stderr)
                continue
            if not repl.execute_line(stripped):
                print(f"Error in line {line_no}: {stripped[:80]}", file=sys.stderr)
                sys.exit(1)


def main() -> None:
    """Parse CLI arguments and dispatch."""
    args = sys.argv[1:]

    if "--help" in args or "-h" in args:
        print_help()
        return

    execute_cmd = None
    script_file = None
    import_path = None
    sample = False
    log_level = DEFAULT_LOG_LEVEL

    i = 0
    while i < len(args):
        if args[i] == "--execute" and i + 1 < len(args):
            execute_cmd = args[i + 1]
            i += 2
        elif args[i] == "--file" and i + 1 < len(args):
            script_file = args[i + 1]
            i += 2
        elif args[i] == "--import" and i + 1 < len(args):
            import_path = args[i + 1]
            i += 2
        elif args[i] == "--log-level" and i + 1 < len(args):
            log_level = args[i + 1]
            i += 2
        elif args[i] == "--sample":
            sample = True
            i += 1
        else:
            print(f"Unknown option: {args[i]}", file=sys.stderr)
            print_help()
            sys.exit(1)

    try:
        configure_logging(log_level)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    session = build_session(sample=sample, import_path=import_path)

    if execute_cmd:
        execute_single(session, execute_cmd)
    elif script_file:
        execute_script(session, script_file)
    else:
        from cli.repl import REPL
        REPL(session).run()


if __name__ == "__main__":
    main()
