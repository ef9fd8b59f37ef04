"""Document pipeline: read lines, pass code fences through, run the replacer chain"""

from typing import BinaryIO

from gitbook2wiki.config import Settings
from gitbook2wiki.core.models import Fail, LineReplacer, NotResponsible, ParserState, Pass, ReplacerOutcome
from gitbook2wiki.core.paths import PathResolver
from gitbook2wiki.core.reader import LineReader
from gitbook2wiki.core.replacers import toc_entry, unescape_links, unescape_page_refs, unescape_parens


CODE_FENCE = b"```"
NEWLINE = b"\n"
ENCODING = "utf-8"
# Undecodable bytes round-trip unchanged through the replacers.
DECODE_ERRORS = "surrogateescape"


class ConversionError(Exception):
    """A document could not be converted (e.g. a page link without a title)."""

    def __init__(self, filename: str, reason: str):
        super().__init__(f"{filename}: {reason}")
        self.filename = filename
        self.reason = reason


def build_replacers(
    filename: str,
    state: ParserState,
    reader: LineReader,
    resolver: PathResolver,
    ) -> list[LineReplacer]:
    """Return the replacer chain for one document, in application order."""
    return [
        toc_entry(filename, state, reader),
        unescape_parens,
        unescape_page_refs,
        unescape_links(resolver),
    ]


def run_replacers(line: str, replacers: list[LineReplacer]) -> ReplacerOutcome:
    """Thread line through replacers; stops early on SkipLine or Fail."""
    for replace in replacers:
        outcome = replace(line)
        if isinstance(outcome, NotResponsible):
            continue
        if not isinstance(outcome, Pass):
            return outcome
        line = outcome.line
    return Pass(line)


def convert_document(filename: str, src: BinaryIO, dest: BinaryIO, settings: Settings) -> None:
    """Convert one GitBook markdown document read from src and write the wiki version to dest.

    filename is the source path relative to the book root; it selects the
    table-of-contents behaviour. Nothing is written to dest unless the whole
    document converts.
    """
    reader = LineReader(src, settings.chunk_size)
    state = ParserState()
    replacers = build_replacers(filename, state, reader, PathResolver(settings))
    out: list[bytes] = []

    for raw in reader:
        if raw.startswith(CODE_FENCE):
            out += [raw, NEWLINE]
            for raw in reader:
                out += [raw, NEWLINE]
                if raw == CODE_FENCE:
                    state.prev_line = ""
                    break
            continue

        outcome = run_replacers(raw.decode(ENCODING, DECODE_ERRORS), replacers)
        if isinstance(outcome, Fail):
            raise ConversionError(filename, outcome.reason)
        if not isinstance(outcome, Pass):
            continue

        line = outcome.line
        # Adjacent quotes would merge into one blockquote.
        if line.startswith(">") and state.prev_line.startswith(">"):
            out.append(NEWLINE)
        out += [line.encode(ENCODING, DECODE_ERRORS), NEWLINE]

        # Lines consumed by a replacer's read-ahead (SUMMARY.md only) never get here.
        state.prev_line = line

    dest.write(b"".join(out))
    dest.flush()
