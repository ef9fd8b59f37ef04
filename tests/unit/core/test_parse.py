"""Unit tests for core/parse.py"""

import io

import pytest

from gitbook2wiki.config import Settings
from gitbook2wiki.core.models import NOT_RESPONSIBLE, SKIP_LINE, Fail, Pass
from gitbook2wiki.core.parse import ConversionError, convert_document, run_replacers


# --- run_replacers ---

def test_run_replacers_threads_line_through_chain():
    chain = [lambda l: Pass(l + "a"), lambda l: NOT_RESPONSIBLE, lambda l: Pass(l + "b")]
    assert run_replacers("x", chain) == Pass("xab")


def test_run_replacers_stops_on_skip():
    calls = []
    chain = [lambda l: SKIP_LINE, lambda l: calls.append(l) or Pass(l)]
    assert run_replacers("x", chain) is SKIP_LINE
    assert calls == []


def test_run_replacers_stops_on_fail():
    chain = [lambda l: Fail("bad"), lambda l: Pass("never")]
    assert run_replacers("x", chain) == Fail("bad")


# --- convert_document ---

def test_every_line_ends_with_newline(convert):
    assert convert("first\nsecond") == "first\nsecond\n"


def test_empty_document(convert):
    assert convert("") == ""


def test_blank_lines_kept_in_pages(convert):
    assert convert("a\n\nb\n") == "a\n\nb\n"


def test_links_and_parens_rewritten(convert):
    src = r"See [JSON](responses/json.md) \(required\)." + "\n"
    assert convert(src) == "See [[JSON|responses-json]] (required).\n"


def test_page_ref_rewritten_to_wiki_reference(convert):
    src = '{% page-ref page="../view/view.md" %}\n'
    assert convert(src) == "> Reference: [[View|view-view]]\n"


def test_code_fence_copied_verbatim(convert):
    src = (
        "Before [A](a.md)\n"
        "```go\n"
        r"app.Get(\(x\), [link](page.md), [](broken.md))" + "\n"
        '{% page-ref page="x.md" %}\n'
        "```\n"
        "After [B](b.md)\n"
    )
    assert convert(src) == (
        "Before [[A|a]]\n"
        "```go\n"
        r"app.Get(\(x\), [link](page.md), [](broken.md))" + "\n"
        '{% page-ref page="x.md" %}\n'
        "```\n"
        "After [[B|b]]\n"
    )


def test_unclosed_code_fence_runs_to_end(convert):
    src = "```\n[](broken.md)\n"
    assert convert(src) == src


def test_code_fence_content_bytes_preserved(settings):
    raw = b"```\ninvalid \xff utf-8 \\(x\\)\r\n```\n"
    dest = io.BytesIO()
    convert_document("page.md", io.BytesIO(raw), dest, settings)
    assert dest.getvalue() == b"```\ninvalid \xff utf-8 \\(x\\)\n```\n"


def test_invalid_utf8_outside_fence_passes_through(settings):
    """Undecodable bytes in rewritten lines are kept as they are."""
    dest = io.BytesIO()
    convert_document("page.md", io.BytesIO(b"caf\xe9 [A](a.md)\n"), dest, settings)
    assert dest.getvalue() == b"caf\xe9 [[A|a]]\n"


def test_consecutive_quotes_separated(convert):
    assert convert("> a\n> b\n") == "> a\n\n> b\n"


def test_quote_after_code_fence_not_separated(convert):
    assert convert("> a\n```\n> code\n```\n> b\n") == "> a\n```\n> code\n```\n> b\n"


def test_page_refs_on_consecutive_lines_separated(convert):
    src = '{% page-ref page="a.md" %}\n{% page-ref page="b.md" %}\n'
    assert convert(src) == "> Reference: [[A|a]]\n\n> Reference: [[B|b]]\n"


def test_missing_title_fails_document(settings):
    dest = io.BytesIO()
    with pytest.raises(ConversionError, match=r"Title is missing from: \[\]\(target.md\)") as exc:
        convert_document("guide/page.md", io.BytesIO(b"ok\nbad [](target.md)\n"), dest, settings)
    assert exc.value.filename == "guide/page.md"
    assert dest.getvalue() == b""


def test_keep_links_leaves_links(convert):
    src = "[JSON](responses/json.md) [](x.md) \\(p\\)\n"
    out = convert(src, settings=Settings(keep_links=True))
    assert out == "[JSON](responses/json.md) [](x.md) (p)\n"


def test_long_line_not_split(convert):
    words = " ".join(f"[w{i}](dir/p{i}.md)" for i in range(2000))
    out = convert(words + "\n", settings=Settings(chunk_size=16))
    assert out.count("\n") == 1
    assert "[[w1999|dir-p1999]]" in out


# --- table of contents ---

SUMMARY_MD = """\
# Table of contents

* [What is Iris](README.md)

## 📌Getting started

* [Installation](getting-started/installation.md)
* [Quick start](getting-started/quick-start.md)

## Routing

* [Overview](routing/README.md)
"""

SIDEBAR_MD = """\
* [[What is Iris|Home]]
* 📌Getting started
  * [[Installation|getting-started-installation]]
  * [[Quick start|getting-started-quick-start]]
* Routing
  * [[Overview|Home]]
"""


def test_summary_becomes_sidebar(convert):
    assert convert(SUMMARY_MD, filename="SUMMARY.md") == SIDEBAR_MD


def test_section_heading_nests_following_entry(convert):
    src = "## Section\n\n* [Title](page.md)\n"
    assert convert(src, filename="SUMMARY.md") == "* Section\n  * [[Title|page]]\n"


def test_toc_rules_only_apply_to_summary(convert):
    src = "# Title\n\n## Section\n\n* [Title](page.md)\n"
    assert convert(src, filename="page.md") == src.replace("[Title](page.md)", "[[Title|page]]")
