"""
FILE: memo/repl/parser.py
PURPOSE: Parse user input into commands and arguments for REPL
EXPORTS:
  - ParseResult (dataclass for parsed commands)
  - parse_command(input_str) -> ParseResult
DEPENDENCIES:
  - shlex (for shell-like parsing with quotes)
  - dataclasses (for ParseResult)
NOTES:
  - Quoted strings stay one argument: add "Buy milk" --due "2024-01-01 09:00"
  - Flags start with --; a flag followed by another flag (or nothing) is boolean
  - Command names are case-insensitive, arguments are kept as typed
"""

import shlex
from dataclasses import dataclass, field
from typing import Dict, List, Union


@dataclass
class ParseResult:
    """
    Result of parsing a REPL command.

    Attributes:
        command: The command name (e.g., "add", "ls", "show")
        args: Positional arguments
        flags: Flag arguments (e.g., {"category": "Work", "json": True})
        raw_input: Original input string
    """
    command: str
    args: List[str] = field(default_factory=list)
    flags: Dict[str, Union[str, bool]] = field(default_factory=dict)
    raw_input: str = ""


def parse_command(input_str: str) -> ParseResult:
    """
    Parse REPL input into command, args, and flags.

    Examples:
        >>> parse_command("show 42")
        ParseResult(command='show', args=['42'], flags={}, raw_input='show 42')

        >>> parse_command('add "Pay rent" --category Home')
        ParseResult(command='add', args=['Pay rent'], flags={'category': 'Home'}, raw_input='add "Pay rent" --category Home')

    Empty input gives command="".
    """
    input_str = input_str.strip()
    if not input_str:
        return ParseResult(command="", raw_input=input_str)

    try:
        tokens = shlex.split(input_str)
    except ValueError:
        # Unbalanced quotes: fall back to whitespace split
        tokens = input_str.split()

    if not tokens:
        return ParseResult(command="", raw_input=input_str)

    command = tokens[0].lower()
    args: List[str] = []
    flags: Dict[str, Union[str, bool]] = {}

    rest = iter(range(1, len(tokens)))
    for i in rest:
        token = tokens[i]
        if not token.startswith("--"):
            args.append(token)
            continue

        name = token[2:]
        if i + 1 < len(tokens) and not tokens[i + 1].startswith("--"):
            flags[name] = tokens[i + 1]
            next(rest)
        else:
            flags[name] = True

    return ParseResult(command=command, args=args, flags=flags, raw_input=input_str)
