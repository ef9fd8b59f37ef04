"""Source-to-wiki path and link resolution"""

import posixpath

from gitbook2wiki.config import Settings


MARKDOWN_SUFFIX = ".md"
GITBOOK_ASSETS = ".gitbook/assets"
WIKI_ASSETS = "_assets"

RENAMES = {
    "README.md": "Home.md",
    "SUMMARY.md": "_Sidebar.md",
}


def resolve_output_path(name: str, keep_links: bool = False) -> str:
    """Return the destination path (relative to the wiki root) for a source-relative path.

    GitHub wikis have no directories, so nested pages get the flattened
    directory as a prefix of their base name while still being written
    under their original directory:

      responses/json.md      -> responses/responses-json.md
      responses/sub/other.md -> responses/sub/responses-sub-other.md
      ../.gitbook/assets/x   -> _assets/x

    Parent segments (``../``) are dropped, not resolved.
    """
    name = name.replace("\\", "/")
    if keep_links:
        return name

    name = name.replace("../", "")
    dir_name, base = posixpath.split(name)

    if base in RENAMES:
        return posixpath.join(dir_name, RENAMES[base])

    if name.startswith(GITBOOK_ASSETS):
        return WIKI_ASSETS + name[len(GITBOOK_ASSETS):]

    if dir_name:
        base = dir_name.replace("/", "-") + "-" + base
    return posixpath.join(dir_name, base)


def resolve_link(name: str, wiki_repo: str, keep_links: bool = False) -> str:
    """Return the wiki page token for name, or the full wiki link if it is an asset."""
    name = resolve_output_path(name, keep_links)
    if keep_links:
        return name

    if name.startswith(WIKI_ASSETS):
        return posixpath.join(wiki_repo, name)

    base = posixpath.basename(name)
    if base.endswith(MARKDOWN_SUFFIX):
        base = base[:-len(MARKDOWN_SUFFIX)]
    return base


class PathResolver:
    """Path and link resolution bound to one set of conversion settings."""

    def __init__(self, settings: Settings):
        self.keep_links = settings.keep_links
        self.wiki_repo = settings.wiki_repo

    def output_path(self, name: str) -> str:
        return resolve_output_path(name, self.keep_links)

    def link(self, name: str) -> str:
        return resolve_link(name, self.wiki_repo, self.keep_links)
