"""Markdown parsing utilities for wiki-links, markdown links, and inline tags."""

import re

# Match [[target]], [[target|display]], [[target#section]]; ![[embed]] is not a link
WIKILINK_PATTERN = re.compile(r"(?<!!)\[\[([^\]|#]*)(?:#[^\]|]*)?(?:\|[^\]]*)?\]\]")

# Match [display](target.md) and [display](target.md#section), local files only, not images
MDLINK_PATTERN = re.compile(r"(?<!!)\[[^\]]*\]\(\s*<?([^)\s>]+?\.md)(?:#[^)\s>]*)?>?\s*\)", re.IGNORECASE)

# Inline #tag: starts a line or follows whitespace, nested tags use '/'
TAG_PATTERN = re.compile(r"(?:^|(?<=\s))#([\w/-]+)", re.UNICODE)

FENCED_CODE_PATTERN = re.compile(r"^(```|~~~).*?^\1[^\n]*$", re.MULTILINE | re.DOTALL)
INLINE_CODE_PATTERN = re.compile(r"`[^`\n]*`")


def strip_code(content: str) -> str:
    """Remove fenced code blocks and inline code spans."""
    content = FENCED_CODE_PATTERN.sub("", content)
    return INLINE_CODE_PATTERN.sub("", content)


def extract_links(content: str) -> list[str]:
    """Extract every outgoing link occurrence from content.

    Wiki-links and markdown links to local ``.md`` files are both counted.
    Embeds (``![[...]]``, ``![...](...)``) are not connections and are
    skipped. Occurrences are not deduplicated: linking the same note twice
    is two connections. Targets are lowercased and stripped.
    """
    body = strip_code(content)
    result = []
    for match in WIKILINK_PATTERN.finditer(body):
        target = match.group(1).strip()
        if target:
            result.append(target.lower())
    for match in MDLINK_PATTERN.finditer(body):
        target = match.group(1).strip()
        if "://" in target:
            continue
        result.append(target.lower())
    return result


def extract_inline_tags(content: str) -> list[str]:
    """Extract inline ``#tag`` names from content, without the ``#``.

    Purely numeric tags (``#123``) are not tags, matching how note apps
    treat them. Code spans and fenced blocks are ignored.
    """
    body = strip_code(content)
    tags = []
    for match in TAG_PATTERN.finditer(body):
        name = match.group(1).rstrip("/")
        if not name or name.replace("/", "").isdigit():
            continue
        tags.append(name)
    return tags


def count_words(text: str) -> int:
    """Count whitespace-delimited non-empty tokens."""
    return len(text.split())
