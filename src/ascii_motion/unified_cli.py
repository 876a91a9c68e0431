"""`ascii-motion <command>` dispatcher."""

import importlib
import inspect
import sys
from typing import List, Optional, Sequence

from . import __version__

PROG = "ascii-motion"

# command -> (module, one-line summary)
COMMANDS = {
    "animate": ("ascii_motion.animate_svg", "write shimmering ASCII SVG frames for an image"),
    "convert": ("ascii_motion.image_to_svg", "turn an image into an ASCII SVG"),
}

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_IMPORT = 3
EXIT_NO_ENTRY = 4


def usage(file=None) -> None:
    file = file or sys.stdout
    print(f"Usage: {PROG} <command> [args...]", file=file)
    print("Commands:", file=file)
    width = max(len(c) for c in COMMANDS)
    for name in sorted(COMMANDS):
        print(f"  {name.ljust(width)}  {COMMANDS[name][1]}", file=file)
    print(f"Run '{PROG} <command> --help' for command options.", file=file)


def _exit_code(se: SystemExit) -> int:
    return se.code if isinstance(se.code, int) else EXIT_OK


def run_entry(entry, argv: List[str], prog: str) -> int:
    """Call a command's main(), passing argv directly or through sys.argv."""
    takes_argv = len(inspect.signature(entry).parameters) >= 1
    saved = list(sys.argv)
    try:
        if takes_argv:
            result = entry(argv)
        else:
            sys.argv = [prog] + list(argv)
            result = entry()
    except SystemExit as se:
        return _exit_code(se)
    except Exception as e:
        print(f"Error running command: {e}", file=sys.stderr)
        return EXIT_ERROR
    finally:
        sys.argv = saved
    return EXIT_OK if result is None else result


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    if not argv or argv[0] in ("-h", "--help"):
        usage()
        return EXIT_OK
    if argv[0] == "--version":
        print(f"{PROG} {__version__}")
        return EXIT_OK

    cmd, args = argv[0], argv[1:]
    if cmd not in COMMANDS:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        usage(file=sys.stderr)
        return EXIT_USAGE

    module_path = COMMANDS[cmd][0]
    try:
        module = importlib.import_module(module_path)
    except Exception as e:
        print(f"Failed to import command '{cmd}' ({module_path}): {e}", file=sys.stderr)
        return EXIT_IMPORT

    entry = getattr(module, "main", None)
    if not callable(entry):
        print(f"Command module '{module_path}' has no callable 'main'", file=sys.stderr)
        return EXIT_NO_ENTRY

    return run_entry(entry, args, prog=f"{PROG} {cmd}")


if __name__ == "__main__":
    raise SystemExit(main())
