"""Replacer outcomes and per-run conversion state"""

from dataclasses import dataclass
from typing import Callable, Union


@dataclass(frozen=True)
class Pass:
    """Continue the chain with line (possibly unchanged)."""
    line: str


@dataclass(frozen=True)
class NotResponsible:
    """The replacer declines; the chain continues with the original line."""


@dataclass(frozen=True)
class SkipLine:
    """Stop the chain and emit nothing for this line."""


@dataclass(frozen=True)
class Fail:
    """Abort the whole document."""
    reason: str


NOT_RESPONSIBLE = NotResponsible()
SKIP_LINE = SkipLine()

ReplacerOutcome = Union[Pass, NotResponsible, SkipLine, Fail]
LineReplacer = Callable[[str], ReplacerOutcome]


@dataclass
class ParserState:
    """Per-document context shared with stateful replacers."""
    prev_line: str = ""     # last emitted line, not necessarily the last one read


@dataclass
class ConvertCounts:
    parsed: int = 0
    copied: int = 0
