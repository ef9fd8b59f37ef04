"""Line replacers: single-line rewrites applied in order to every non-code line"""

import posixpath
import re

from gitbook2wiki.core.models import (
    NOT_RESPONSIBLE, SKIP_LINE, Fail, LineReplacer, ParserState, Pass, ReplacerOutcome,
)
from gitbook2wiki.core.paths import MARKDOWN_SUFFIX, PathResolver
from gitbook2wiki.core.reader import LineReader


TOC_FILE = "SUMMARY.md"
BULLET = "* "
INDENT = "  "
REFERENCE_PREFIX = "> Reference: "
HTTP_PREFIX = "http"

PARENS_RE = re.compile(r"\\\((.*?)\\\)")
PAGE_REF_RE = re.compile(r'{% page-ref page="(.*?)" %}')
LINK_RE = re.compile(r"\[(.*?)]\(([^()]+)\)")
WORD_START_RE = re.compile(r"\b\w")


def _title(text: str) -> str:
    """Uppercase the first letter of each word, leaving the rest untouched."""
    return WORD_START_RE.sub(lambda m: m.group().upper(), text)


def toc_entry(filename: str, state: ParserState, reader: LineReader) -> LineReplacer:
    """Flatten SUMMARY.md into a sidebar list; declines for every other file.

    ``# Title`` lines are dropped, ``## Section`` becomes a root bullet and
    bullets directly following a root bullet are nested under it:

      ## Compression            * Compression
                           ->     * [Index](link.md)
      * [Index](link.md)
    """
    responsible = posixpath.basename(filename) == TOC_FILE

    def _entry(line: str) -> ReplacerOutcome:
        if line[0] == "#":
            if line[1] != "#":
                # Top-level heading, usually "Table of Contents".
                return SKIP_LINE
            rest = line[2:]
            if rest.startswith(" "):
                rest = rest[1:]
            return Pass(BULLET + rest)

        if line[0] == "*" and state.prev_line.startswith((BULLET, INDENT + BULLET)):
            return Pass(INDENT + line)

        return Pass(line)

    def replace(line: str) -> ReplacerOutcome:
        if not responsible:
            return NOT_RESPONSIBLE

        line = line.strip()
        if not line:
            return SKIP_LINE
        if len(line) < 4:
            return Pass(line)

        outcome = _entry(line)
        # The sidebar must not contain blank separators between entries.
        reader.skip_next_blank_line()
        return outcome

    return replace


def unescape_parens(line: str) -> ReplacerOutcome:
    """\\(text\\) -> (text)"""
    return Pass(PARENS_RE.sub(r"(\1)", line))


def _page_ref(match: re.Match) -> str:
    link = match.group(1)
    name = link
    idx = link.rfind("/")
    if idx != -1 and idx < len(link) - 1:
        name = link[idx + 1:]
    title = _title(name.removesuffix(MARKDOWN_SUFFIX))
    return f"{REFERENCE_PREFIX}[{title}]({link})"


def unescape_page_refs(line: str) -> ReplacerOutcome:
    """{% page-ref page="../view/view.md" %} -> > Reference: [View](../view/view.md)"""
    return Pass(PAGE_REF_RE.sub(_page_ref, line))


def unescape_links(resolver: PathResolver) -> LineReplacer:
    """Rewrite book-relative links.

    Page links become wiki links (``[JSON](responses/json.md)`` ->
    ``[[JSON|responses-json]]``), asset links keep their markdown form with
    the target swapped for the wiki asset URL, and http(s) links are left
    alone. A page link without a title fails the document.
    """

    def replace(line: str) -> ReplacerOutcome:
        if resolver.keep_links:
            return Pass(line)

        parts = []
        pos = 0
        for match in LINK_RE.finditer(line):
            title, target = match.groups()
            if target.startswith(HTTP_PREFIX):
                continue

            link = resolver.link(target)
            if not target.endswith(MARKDOWN_SUFFIX):
                replacement = f"[{title}]({link})"
            elif not title:
                return Fail(f"Title is missing from: {match.group(0)}")
            else:
                replacement = f"[[{title}|{link}]]"

            parts.append(line[pos:match.start()])
            parts.append(replacement)
            pos = match.end()

        parts.append(line[pos:])
        return Pass("".join(parts))

    return replace
