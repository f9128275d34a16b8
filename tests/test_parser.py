from vaultlevel.vault.parser import count_words, extract_inline_tags, extract_links


def test_extract_links_counts_every_occurrence() -> None:
    content = "See [[Alpha]], [[beta|Beta note]] and [[alpha#Section]] again."
    assert extract_links(content) == ["alpha", "beta", "alpha"]


def test_extract_links_includes_local_markdown_links() -> None:
    content = "\n".join(
        [
            "[notes](folder/Other.md)",
            "[site](https://example.com/page.md)",
            "[plain](https://example.com)",
        ]
    )
    assert extract_links(content) == ["folder/other.md"]


def test_extract_links_skips_embeds() -> None:
    assert extract_links("![[diagram.png]] and ![[other note]]") == []
    assert extract_links("![[pic.png]] next to [[Real]] and ![cover](cover.md)") == ["real"]


def test_extract_links_ignores_code() -> None:
    content = "\n".join(
        [
            "Real [[one]] and `[[inline]]`",
            "```",
            "[[fenced]]",
            "```",
        ]
    )
    assert extract_links(content) == ["one"]


def test_extract_inline_tags() -> None:
    content = "#tag text #Tag2 and #nested/deep\n# Heading\nemail#nope #123 `#code`"
    assert extract_inline_tags(content) == ["tag", "Tag2", "nested/deep"]


def test_extract_inline_tags_skips_fenced_blocks() -> None:
    content = "~~~\n#hidden\n~~~\n#shown"
    assert extract_inline_tags(content) == ["shown"]


def test_count_words() -> None:
    assert count_words("") == 0
    assert count_words("   \n\t ") == 0
    assert count_words("one  two\nthree\tfour ") == 4
