"""Per-document metric extraction."""

import logging
from collections.abc import Iterable
from typing import Any

from .models import DocumentMetrics, DocumentSnapshot
from .vault.parser import count_words

logger = logging.getLogger(__name__)

# Frontmatter fields that carry tags
TAG_FIELDS = ("tags", "tag")


def normalize_tag(value: Any) -> str:
    """Coerce a tag value to its lower-case, trimmed form."""
    return str(value).strip().lower()


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def collect_tags(fm: dict, inline_tags: Iterable[str]) -> frozenset[str]:
    """Merge frontmatter ``tags``/``tag`` fields and inline tags.

    Scalars and lists are both accepted; non-string values are coerced to
    strings. A field whose value is falsy (``0``, ``false``, ``""``, ``[]``)
    contributes nothing. Empty results and ``None`` entries are dropped.
    """
    tags = set()
    for name in TAG_FIELDS:
        field_value = fm.get(name)
        if not field_value:
            continue
        for value in _as_list(field_value):
            if value is None:
                continue
            tag = normalize_tag(value)
            if tag:
                tags.add(tag)
    for value in inline_tags:
        tag = normalize_tag(value)
        if tag:
            tags.add(tag)
    return frozenset(tags)


def extract_metrics(snapshot: DocumentSnapshot) -> DocumentMetrics:
    """Compute word count, link count and tag set for one document."""
    return DocumentMetrics(
        word_count=count_words(snapshot.content),
        link_count=len(snapshot.links),
        tags=collect_tags(snapshot.frontmatter or {}, snapshot.inline_tags),
        created=snapshot.created,
        modified=snapshot.modified,
    )


def extract_all(snapshots: Iterable[DocumentSnapshot]) -> list[DocumentMetrics]:
    """Extract metrics for every snapshot, skipping any that fail."""
    results = []
    for snapshot in snapshots:
        try:
            results.append(extract_metrics(snapshot))
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning("Could not extract metrics from %s: %s", snapshot.path, e)
    return results
