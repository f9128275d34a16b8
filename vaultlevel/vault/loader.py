"""Vault enumeration and per-document snapshot loading."""

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import frontmatter
import yaml

from ..models import DocumentSnapshot
from .parser import extract_inline_tags, extract_links

logger = logging.getLogger(__name__)

# Errors that exclude a single document from a scan
LOAD_ERRORS = (OSError, UnicodeDecodeError, yaml.YAMLError, ValueError, TypeError)


@dataclass
class ScanResult:
    """Snapshots that loaded, plus the paths that had to be skipped."""

    snapshots: list[DocumentSnapshot] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


def is_hidden(path: Path, vault_path: Path) -> bool:
    """True if any path segment below the vault root starts with '.'."""
    try:
        parts = path.relative_to(vault_path).parts
    except ValueError:
        parts = path.parts
    return any(part.startswith(".") for part in parts)


def iter_documents(vault_path: Path, extension: str = ".md") -> Iterator[Path]:
    """Yield every tracked document in the vault, sorted by path.

    The extension is matched case-insensitively, so ``Note.MD`` is tracked.
    """
    extension = extension.lower()
    for path in sorted(vault_path.rglob("*")):
        if path.suffix.lower() != extension:
            continue
        if not path.is_file() or is_hidden(path, vault_path):
            continue
        yield path


def file_times(path: Path) -> tuple[float, float]:
    """Return (created, modified) epoch seconds for a file.

    Creation time uses ``st_birthtime`` where the platform records it and
    falls back to ``st_ctime`` elsewhere.
    """
    st = os.stat(path)
    created = getattr(st, "st_birthtime", None) or st.st_ctime
    return created, st.st_mtime


def load_document(path: Path) -> DocumentSnapshot:
    """Load a single markdown file with its frontmatter, links and tags."""
    text = path.read_text(encoding="utf-8")
    post = frontmatter.loads(text)

    fm = post.metadata
    if not isinstance(fm, dict):
        fm = {}

    created, modified = file_times(path)

    return DocumentSnapshot(
        path=path,
        content=text,
        frontmatter=fm,
        links=extract_links(post.content),
        inline_tags=extract_inline_tags(post.content),
        created=created,
        modified=modified,
    )


def scan_vault(vault_path: Path, extension: str = ".md") -> ScanResult:
    """Load every tracked document in the vault.

    A document that cannot be read or parsed is logged and skipped; it never
    aborts the scan.
    """
    result = ScanResult()

    for path in iter_documents(vault_path, extension):
        try:
            result.snapshots.append(load_document(path))
        except LOAD_ERRORS as e:
            logger.warning("Could not process file %s: %s", path, e)
            result.skipped.append(path)

    logger.debug(
        "Scanned %s: %d documents, %d skipped",
        vault_path,
        len(result.snapshots),
        len(result.skipped),
    )
    return result
