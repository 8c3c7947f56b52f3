"""
KLUA CLI Entrypoint.

This module provides the command-line interface for inspecting KLUA source code.
It scans and parses a program and prints either its tokens or its syntax tree.

Features:
    - Read source from `.lua`/`.klua` files, inline strings, or stdin.
    - Print the parsed AST as an indented tree or as JSON.
    - Print the raw token list instead of the tree.
    - Report scan and parse failures verbatim on stderr.

Example usage:
    klua hello.lua
    klua -s "local x = 1;" --format json
    klua -s "f(1);" --tokens
    echo "x = 2;" | klua -v

Functions:
    run_klua(source: str, is_string: bool = False, tokens: bool = False, fmt: str = "tree") -> str:
        Executes the KLUA pipeline (scan → parse → render) and returns the rendered text.

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments, runs the pipeline, and returns the process exit status.
"""

import argparse
import json
import logging
import sys

from klua.klua_ast import dump
from klua.klua_errors import KluaError
from klua.klua_lexer import Scanner
from klua.klua_parser import Parser
from klua.klua_version import __version__

logger = logging.getLogger("klua")

SOURCE_SUFFIXES = (".lua", ".klua")


def run_klua(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    fmt: str = "tree",
) -> str:
    """
    Run the KLUA front end: read, scan, parse, and render.

    Args:
        source (str): The KLUA source code or path to a source file.
        is_string (bool): If True, treats `source` as raw code instead of a file path. Defaults to False.
        tokens (bool): If True, renders the token list instead of the tree. Defaults to False.
        fmt (str): Tree rendering, 'tree' or 'json'. Defaults to 'tree'.

    Returns:
        str: The rendered tokens or tree.

    Raises:
        ValueError: If `is_string` is False and the path has an unsupported suffix,
            or `fmt` is unknown.
        KluaError: If the source fails to scan or parse.
    """
    if fmt not in ("tree", "json"):
        raise ValueError(f"Unknown output format: {fmt}")
    if not is_string:
        if not source.endswith(SOURCE_SUFFIXES):
            raise ValueError("Only .lua and .klua files are supported.")
        logger.debug("reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    token_list = Scanner().scan(source)
    if tokens:
        return "\n".join(repr(tok) for tok in token_list)

    root = Parser(token_list).parse()
    if fmt == "json":
        return json.dumps(root.to_dict(), indent=2)
    return dump(root)


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the KLUA CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens`: Print tokens instead of the syntax tree.
        - `-f`, `--format`: Tree output format ('tree' or 'json'), default is 'tree'.
        - `-v`, `--verbose`: Enable debug logging.
        - `--version`: Print the version and exit.

    Returns:
        int: 0 on success, 1 on a scan/parse error, 2 on an input error.
    """
    parser = argparse.ArgumentParser(prog="klua")
    parser.add_argument(
        "source", nargs="?", help="Filename or raw source (with -s); stdin if omitted"
    )
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token list instead of the AST"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=("tree", "json"),
        default="tree",
        help="AST output format (default: tree)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    source = args.source
    is_string = args.string
    if source is None:
        source = sys.stdin.read()
        is_string = True

    try:
        output = run_klua(source, is_string=is_string, tokens=args.tokens, fmt=args.fmt)
    except KluaError as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"[error] {e}", file=sys.stderr)
        return 2

    print(output)
    return 0


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    sys.exit(main())
