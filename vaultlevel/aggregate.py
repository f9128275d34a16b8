"""Corpus-level aggregation of document metrics."""

from collections.abc import Iterable
from datetime import date, datetime

from .models import DocumentMetrics, VaultStats


def aggregate(metrics: Iterable[DocumentMetrics]) -> VaultStats:
    """Fold per-document metrics into corpus totals.

    Every processed document counts as both a note and a file. Tags are
    counted as the size of the union across documents. The result does not
    depend on iteration order.
    """
    count = 0
    connections = 0
    words = 0
    tags: set[str] = set()

    for m in metrics:
        count += 1
        connections += m.link_count
        words += m.word_count
        tags.update(m.tags)

    return VaultStats(
        total_notes=count,
        total_connections=connections,
        total_tags=len(tags),
        total_words=words,
        total_files=count,
    )


def is_same_day(timestamp: float | None, day: date) -> bool:
    """True if an epoch timestamp falls on ``day`` in local time."""
    if timestamp is None:
        return False
    return datetime.fromtimestamp(timestamp).date() == day


def has_activity_on(metrics: Iterable[DocumentMetrics], day: date) -> bool:
    """True if any document was created or modified on ``day``."""
    return any(is_same_day(m.created, day) or is_same_day(m.modified, day) for m in metrics)
