"""Interactive read-eval-print loop and command line entry point."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

from vhisp import __version__, config
from vhisp.config import MODES
from vhisp.debug_utils.pprint import DEFAULT_OPTIONS, PLAIN_OPTIONS, pprint_value
from vhisp.errors import VhispSyntaxError
from vhisp.interpreter import Interpreter
from vhisp.logging_config import setup_logging
from vhisp.types.value import Error, Value

logger = logging.getLogger(__name__)

try:
    import readline
except ImportError:  # not available on every platform
    readline = None


class Repl:
    """Reads one line per iteration, evaluates it, and prints the result.

    Parse failures print the reader's diagnostic instead. The loop ends on
    Ctrl-C or end of input.
    """

    def __init__(
        self,
        interpreter: Optional[Interpreter] = None,
        output: Optional[TextIO] = None,
        color: bool = False,
        prompt: Optional[str] = None,
        history_file: Optional[Path] = None,
    ):
        self.interp = interpreter or Interpreter()
        self.output = output or sys.stdout
        self.options = DEFAULT_OPTIONS if color else PLAIN_OPTIONS
        self.prompt = config.get_prompt() if prompt is None else prompt
        self.history_file = history_file
        # Line history for platforms without readline
        self.history: list[str] = []

    def banner(self) -> None:
        print(f"Vhisp {__version__}", file=self.output)
        print("Press Ctrl+c to exit.\n", file=self.output)

    def process_line(self, line: str) -> Optional[Value]:
        """Evaluate and print one line. Returns the value, or None if it did not parse."""
        try:
            result = self.interp.eval(line)
        except VhispSyntaxError as exc:
            logger.debug("parse failure: %s", exc)
            print(exc.diagnostic(), file=self.output)
            return None
        print(pprint_value(result, self.options), file=self.output)
        return result

    def _load_history(self) -> None:
        if readline is None or self.history_file is None:
            return
        try:
            readline.read_history_file(self.history_file)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("could not read history from %s: %s", self.history_file, exc)

    def _save_history(self) -> None:
        if readline is None or self.history_file is None:
            return
        try:
            readline.write_history_file(self.history_file)
        except OSError as exc:
            logger.warning("could not write history to %s: %s", self.history_file, exc)

    def start(self, input_fn: Callable[[str], str] = input) -> None:
        self.banner()
        self._load_history()
        try:
            while True:
                try:
                    line = input_fn(self.prompt)
                except (KeyboardInterrupt, EOFError):
                    print(file=self.output)
                    break
                self.process_line(line)
                # readline records lines read through input() itself
                if readline is None:
                    self.history.append(line)
        finally:
            self._save_history()
        print("vhisp exited", file=self.output)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vhisp", description="Vhisp S-expression interpreter")
    parser.add_argument("file", nargs="?", help="evaluate each non-blank line of FILE and exit")
    parser.add_argument("-e", "--eval", dest="code", help="evaluate CODE, print the result and exit")
    parser.add_argument(
        "--faithful",
        action="store_const",
        const="faithful",
        dest="mode",
        help="bind len to join and accumulate in ^ (historical behaviour)",
    )
    parser.add_argument("--mode", choices=MODES, dest="mode", help="builtin behaviour for len and ^")
    parser.add_argument("--color", action="store_true", help="colour the printed values")
    parser.add_argument("--log-level", default=None, help="logging level (default: $VHISP_LOG_LEVEL or WARNING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _run_lines(interp: Interpreter, lines, options: dict, out: TextIO, err: TextIO) -> int:
    status = 0
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            result = interp.eval(line, lineno)
        except VhispSyntaxError as exc:
            print(exc.diagnostic(), file=err)
            status = 1
            continue
        print(pprint_value(result, options), file=out)
        if isinstance(result, Error):
            status = 1
    return status


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level or config.get_log_level())

    options = DEFAULT_OPTIONS if args.color else PLAIN_OPTIONS

    if args.code is not None:
        interp = Interpreter(args.mode)
        return _run_lines(interp, [args.code], options, sys.stdout, sys.stderr)

    if args.file is not None:
        interp = Interpreter(args.mode, filename=args.file)
        with open(args.file, "r", encoding="utf-8") as fp:
            return _run_lines(interp, fp.read().splitlines(), options, sys.stdout, sys.stderr)

    Repl(
        Interpreter(args.mode),
        color=args.color,
        history_file=config.get_history_file(),
    ).start()
    return 0


if __name__ == "__main__":
    sys.exit(main())
