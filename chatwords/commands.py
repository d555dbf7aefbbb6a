"""Command-line interface for trying out the chatwords splitters."""

import argparse
import json
import sys
from typing import Callable, Iterable, Iterator, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from . import config as chatwords_config
from . import words

VERSION = "1.0"

console = Console()


def print_usage() -> None:
    """Print usage information."""
    console.print(
        """Usage: chatwords [-h | --help] [-c FILE] [-v] <command> [<args>]

Options:
  -c, --config FILE        Config file (default $CHATWORDS_CONFIG, then the user config dir)
  -v, --verbose            Print diagnostics

Commands:
  words [LINE]             Split a line with quoting and escapes
      -n, --take NUM       Stop after NUM words and print the rest of the line
      --format FMT         Output format: table, json or plain
      <LINE>               The line to split (default: each line of stdin)

  trim [LINE]              Split a line on whitespace and punctuation
      --format FMT         Output format: table, json or plain
      <LINE>               The line to split (default: each line of stdin)

  help                     Show this help message
  version                  Show program version
""",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def print_version() -> None:
    """Print version information."""
    console.print(VERSION, highlight=False)


def debug(args: argparse.Namespace, message: str) -> None:
    """Print a diagnostic line when running verbose."""
    if args.verbose:
        console.print(f"[dim]{escape(message)}[/dim]")


def read_lines(line: Optional[str]) -> Iterator[str]:
    """Yield the line given on the command line, or every line of stdin."""
    if line is not None:
        yield line
        return

    for raw in sys.stdin:
        yield raw.rstrip("\r\n")


def split_words(line: str, take: Optional[int]) -> tuple[list[str], Optional[str]]:
    """
    Split a line with the decoding tokenizer.

    Args:
        line: The line to split
        take: Maximum number of words to take, or None for all of them

    Returns:
        (tokens, rest): The words taken, and the rest of the line when a
        limit was given
    """
    it = words.words(line)

    if take is None:
        return list(it), None

    tokens = []
    while len(tokens) < take:
        token = next(it, None)
        if token is None:
            break
        tokens.append(token)

    return tokens, it.rest()


def render(line: str, tokens: list[str], rest: Optional[str], fmt: str) -> None:
    """Print the result of splitting one line."""
    if fmt == "json":
        record = {"line": line, "tokens": tokens}
        if rest is not None:
            record["rest"] = rest
        console.print(
            json.dumps(record, ensure_ascii=False),
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
        return

    if fmt == "plain":
        for token in tokens:
            console.print(
                token, markup=False, highlight=False, emoji=False, soft_wrap=True
            )
        if rest is not None:
            console.print(
                f"rest: {rest}",
                markup=False,
                highlight=False,
                emoji=False,
                soft_wrap=True,
            )
        return

    table = Table(title=Text(line), title_justify="left")
    table.add_column("#", justify="right", style="magenta")
    table.add_column("Token")

    for i, token in enumerate(tokens):
        table.add_row(str(i), Text(repr(token)))

    if rest is not None:
        table.add_row("rest", Text(repr(rest)), style="dim")

    console.print(table)


def run_splitter(
    args: argparse.Namespace,
    lines: Iterable[str],
    split: Callable[[str], tuple[list[str], Optional[str]]],
) -> None:
    """Split and render each line."""
    count = 0

    for line in lines:
        if count and args.format == "plain":
            console.print()

        tokens, rest = split(line)
        render(line, tokens, rest, args.format)
        count += 1

    debug(args, f"Split {count} line(s)")


def cmd_words(args: argparse.Namespace) -> None:
    """Execute the words command."""
    if args.take is not None and args.take < 0:
        console.print("[red]✗ --take must not be negative[/red]")
        sys.exit(1)

    debug(args, f"Splitter: words, take: {args.take}")
    run_splitter(args, read_lines(args.line), lambda line: split_words(line, args.take))


def cmd_trim(args: argparse.Namespace) -> None:
    """Execute the trim command."""
    debug(args, "Splitter: trimmed words")
    run_splitter(
        args,
        read_lines(args.line),
        lambda line: (list(words.TrimmedWords(line)), None),
    )


def apply_config(args: argparse.Namespace) -> None:
    """Fill in options left unset on the command line from the config file."""
    cfg = chatwords_config.load_config(args.config)

    if cfg.path is not None:
        debug(args, f"Loaded config from {cfg.path}")
    else:
        debug(args, "No config file, using defaults")

    if args.format is None:
        args.format = cfg.format
    if args.command == "words" and args.take is None:
        args.take = cfg.take


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Chat command line splitter", add_help=False
    )

    # Add global options
    parser.add_argument("-h", "--help", action="store_true", help="Show help message")
    parser.add_argument("-c", "--config", type=str, help="Config file path")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Print diagnostics"
    )

    # Add subparsers for commands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Words command
    words_parser = subparsers.add_parser("words", add_help=False)
    words_parser.add_argument(
        "-h",
        "--help",
        action="store_true",
        dest="command_help",
        help="Show help for words",
    )
    words_parser.add_argument(
        "-n", "--take", type=int, help="Stop after this many words"
    )
    words_parser.add_argument(
        "--format", choices=chatwords_config.FORMATS, help="Output format"
    )
    words_parser.add_argument("line", nargs="?", help="Line to split")

    # Trim command
    trim_parser = subparsers.add_parser("trim", add_help=False)
    trim_parser.add_argument(
        "-h",
        "--help",
        action="store_true",
        dest="command_help",
        help="Show help for trim",
    )
    trim_parser.add_argument(
        "--format", choices=chatwords_config.FORMATS, help="Output format"
    )
    trim_parser.add_argument("line", nargs="?", help="Line to split")

    # Help command
    subparsers.add_parser("help", add_help=False)

    # Version command
    subparsers.add_parser("version", add_help=False)

    if argv is None:
        argv = sys.argv[1:]

    # Parse arguments
    if not argv:
        print_usage()
        return

    args = parser.parse_args(argv)

    # Handle global help
    if args.help or args.command == "help":
        print_usage()
        return

    # Handle command-specific help
    if getattr(args, "command_help", False):
        print_usage()
        return

    # Handle version
    if args.command == "version":
        print_version()
        return

    # Execute commands
    if args.command == "words":
        apply_config(args)
        cmd_words(args)
    elif args.command == "trim":
        apply_config(args)
        cmd_trim(args)
    else:
        print_usage()
