"""Root test configuration: a small GitBook source tree shared by walker and CLI tests"""

from pathlib import Path

import pytest


PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"

BOOK_FILES = {
    "README.md": "# Iris\n\nWelcome. Start with [JSON](responses/json.md).\n",
    "SUMMARY.md": (
        "# Table of contents\n"
        "\n"
        "* [What is Iris](README.md)\n"
        "\n"
        "## Responses\n"
        "\n"
        "* [JSON](responses/json.md)\n"
    ),
    "responses/json.md": (
        "# JSON\n"
        "\n"
        "![logo](../.gitbook/assets/image.png)\n"
        "\n"
        "```go\n"
        "ctx.JSON(map[string]string{\"[a](b.md)\": \"x\"})\n"
        "```\n"
        "\n"
        '{% page-ref page="../README.md" %}\n'
    ),
    ".git/config": "[core]\n",
}


@pytest.fixture(name="book_dir")
def book_dir_fixture(tmp_path) -> Path:
    """A GitBook source tree with pages, a summary, an asset and a .git directory."""
    root = tmp_path / "book"
    for rel, text in BOOK_FILES.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
    asset = root / ".gitbook" / "assets" / "image.png"
    asset.parent.mkdir(parents=True)
    asset.write_bytes(PNG_BYTES)
    return root
