"""Tree walker: convert markdown files and copy everything else into the wiki tree"""

import logging
import os
import shutil
from pathlib import Path
from typing import Iterator

from gitbook2wiki.config import Settings
from gitbook2wiki.core.models import ConvertCounts
from gitbook2wiki.core.parse import convert_document
from gitbook2wiki.core.paths import MARKDOWN_SUFFIX, PathResolver


logger = logging.getLogger(__name__)

SKIP_DIRS = {".git"}


def iter_source_files(root: Path) -> Iterator[Path]:
    """Yield regular files under root in a stable order, skipping .git directories."""
    if not root.is_dir():
        raise FileNotFoundError(f"Source directory not found: {root}")

    for dirpath, dirnames, filenames in os.walk(root):
        for name in SKIP_DIRS.intersection(dirnames):
            logger.debug("Skip <%s> directory", name)
            dirnames.remove(name)
        dirnames.sort()

        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.is_file() and not path.is_symlink():
                yield path


def convert_file(rel: str, src_path: Path, dest_root: Path, settings: Settings, counts: ConvertCounts) -> Path:
    """Convert or copy a single file. Returns the output path."""
    out_path = dest_root / PathResolver(settings).output_path(rel)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    with src_path.open("rb") as src, out_path.open("wb") as dest:
        if out_path.suffix == MARKDOWN_SUFFIX:
            if src_path.name != out_path.name:
                logger.debug("Parse <%s> as <%s>", src_path.as_posix(), out_path.as_posix())
            else:
                logger.debug("Parse <%s>", src_path.as_posix())
            convert_document(rel, src, dest, settings)
            counts.parsed += 1
        else:
            logger.debug("Copy <%s> to <%s>", src_path.as_posix(), out_path.as_posix())
            shutil.copyfileobj(src, dest)
            counts.copied += 1

    return out_path


def convert_tree(settings: Settings) -> ConvertCounts:
    """Convert the whole GitBook tree at settings.src_dir into settings.dest_dir.

    Stops at the first error; files already written are left in place.
    """
    src_root = Path(settings.src_dir)
    dest_root = Path(settings.dest_dir)
    dest_root.mkdir(parents=True, exist_ok=True)

    counts = ConvertCounts()
    for path in iter_source_files(src_root):
        rel = path.relative_to(src_root).as_posix()
        convert_file(rel, path, dest_root, settings, counts)
    return counts
