import pytest

from vaultlevel.models import VaultStats
from vaultlevel.progression import (
    badge_for,
    base_xp,
    compute_progression,
    format_number,
    has_streak_bonus,
    level_for_xp,
    threshold_for,
    total_xp,
)


def _stats(notes=0, connections=0, tags=0, words=0) -> VaultStats:
    return VaultStats(
        total_notes=notes,
        total_connections=connections,
        total_tags=tags,
        total_words=words,
        total_files=notes,
    )


def test_thresholds() -> None:
    assert [threshold_for(level) for level in range(1, 9)] == [100, 125, 156, 195, 244, 305, 381, 476]


def test_base_xp_counts_whole_hundreds_of_words() -> None:
    assert base_xp(_stats(words=199)) == 2
    assert base_xp(_stats(words=200)) == 4


def test_empty_vault_is_level_one() -> None:
    p = compute_progression(_stats(), streak=0)
    assert (p.level, p.current_xp, p.next_level_xp, p.total_xp) == (1, 0, 100, 0)


def test_ten_notes_example() -> None:
    # 150 + 40 + 15 + 20 = 225 -> clears 100 and 125 exactly
    p = compute_progression(_stats(notes=10, connections=5, tags=3, words=1000), streak=0)
    assert p.total_xp == 225
    assert p.level == 3
    assert p.current_xp == 0
    assert p.next_level_xp == 156


def test_hundred_notes_example() -> None:
    # 1500 XP: 100+125+156+195+244+305 = 1125 cleared, 375 into level 7
    p = compute_progression(_stats(notes=100), streak=3)
    assert p.total_xp == 1500
    assert p.level == 7
    assert p.current_xp == 375
    assert p.next_level_xp == 381


def test_streak_bonus_applied_before_leveling() -> None:
    # base 300 + 80 + 20 + 50 = 450, +5% = 472.5
    stats = _stats(notes=20, connections=10, tags=4, words=2500)
    without = compute_progression(stats, streak=6)
    with_bonus = compute_progression(stats, streak=7)

    assert without.total_xp == 450
    assert without.level == 4
    assert without.current_xp == 69

    assert with_bonus.total_xp == pytest.approx(472.5)
    assert with_bonus.level == 4
    assert with_bonus.current_xp == pytest.approx(91.5)
    assert with_bonus.next_level_xp == 195


def test_bonus_can_cross_a_level() -> None:
    # 95 + 2 = 97 XP stays at level 1; with the bonus 101.85 clears the first threshold
    stats = _stats(tags=19, words=100)
    assert compute_progression(stats, streak=0).level == 1
    assert total_xp(stats, 7) == pytest.approx(101.85)
    assert compute_progression(stats, streak=7).level == 2


def test_streak_bonus_threshold() -> None:
    assert not has_streak_bonus(6)
    assert has_streak_bonus(7)
    assert has_streak_bonus(30)


def test_progression_is_pure_function_of_stats_and_streak() -> None:
    a = compute_progression(_stats(notes=12, connections=40, tags=9, words=5432), streak=8)
    b = compute_progression(_stats(notes=12, connections=40, tags=9, words=5432), streak=8)
    assert a == b


@pytest.mark.parametrize("xp", [0, 1, 99, 100, 224.5, 225, 1000, 12345.6, 10**6])
def test_leveling_invariant(xp: float) -> None:
    p = level_for_xp(xp)
    assert 0 <= p.current_xp < p.next_level_xp
    assert p.next_level_xp == threshold_for(p.level)
    cleared = sum(threshold_for(level) for level in range(1, p.level))
    assert cleared + p.current_xp == pytest.approx(xp)


@pytest.mark.parametrize(
    "level,title",
    [
        (0, "Seedling"),
        (1, "Seedling"),
        (4, "Seedling"),
        (5, "Budding"),
        (14, "Flourishing"),
        (15, "Scholar"),
        (29, "Graduate"),
        (45, "Master"),
        (99, "Transcendent"),
        (100, "Eternal"),
        (250, "Eternal"),
    ],
)
def test_badge_for(level: int, title: str) -> None:
    assert badge_for(level).title == title


def test_badge_fields() -> None:
    badge = badge_for(60)
    assert (badge.emoji, badge.title, badge.color) == ("💎", "Diamond", "#0ea5e9")


def test_format_number() -> None:
    assert format_number(999) == "999"
    assert format_number(1500) == "1.5K"
    assert format_number(2_500_000) == "2.5M"
    assert format_number(91.5) == "91.5"
    assert format_number(225.0) == "225"
