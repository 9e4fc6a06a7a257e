"""Tests for field extraction from normalized card lines."""

from __future__ import annotations

import pytest

from promo_feed.config import PolicyConfig
from promo_feed.core.types import PromoRecord
from promo_feed.extract.fields import extract_promo


def test_extracts_welcome_bonus_card():
    """The canonical sign-up card yields title, tag, bullet and code"""
    lines = ["SIGN-UP", "Welcome Bonus", "Get 125% up to $500", "Promocode: JOIN125", "Join Now"]

    record = extract_promo(lines, PolicyConfig())

    assert record == PromoRecord(
        title="Welcome Bonus",
        tags=("SIGN-UP",),
        bullets=("Get 125% up to $500",),
        code="JOIN125",
    )


def test_rejects_block_without_code_line():
    """Filter bars and navigation blocks produce no record"""
    assert extract_promo(["Filter by:", "SPORTSBOOK", "Join Now"], PolicyConfig()) is None


@pytest.mark.parametrize(
    "code_line",
    ["Promocode FOO123", "promocode: foo123", "PROMOCODE:FOO123", "Promocode :  Foo123"],
)
def test_code_ignores_marker_case_and_colon(code_line):
    """Code is the uppercased token whatever the marker case or colon"""
    record = extract_promo(["Great Offer Here", code_line], PolicyConfig())

    assert record is not None
    assert record.code == "FOO123"


def test_repeated_tag_kept_once_in_first_seen_order():
    """A tag repeated in any case appears once, at its first position"""
    lines = ["CASINO", "Casino Cashback", "crypto", "casino", "Promocode: CASH10"]

    record = extract_promo(lines, PolicyConfig())

    assert record is not None
    assert record.tags == ("CASINO", "CRYPTO")
    assert record.title == "Casino Cashback"
    assert record.bullets == ()


def test_bullets_skip_tags_labels_and_short_lines():
    """Bullets never contain tag labels, UI labels or very short lines"""
    policy = PolicyConfig()
    lines = [
        "Weekly Reload",
        "Bonus Details",
        "SPORTSBOOK",
        "ok",
        "Up to $250 weekly",
        "join now",
        "Promocode: RELOAD",
        "Rollover 10x",
    ]

    record = extract_promo(lines, policy)

    assert record is not None
    assert record.bullets == ("Up to $250 weekly",)
    labels = {label.lower() for label in policy.ui_labels}
    vocabulary = {tag.lower() for tag in policy.tag_vocabulary}
    for bullet in record.bullets:
        assert bullet.lower() not in labels
        assert bullet.lower() not in vocabulary


def test_title_skips_labels_and_short_lines():
    """Title is the first line of at least six characters that is not a UI label"""
    lines = ["Join Now", "Promo", "Filter by: All", "Big Weekend Boost", "Promocode: WKND"]

    record = extract_promo(lines, PolicyConfig())

    assert record is not None
    assert record.title == "Big Weekend Boost"


def test_rejects_block_without_title():
    """A code alone is not an offer"""
    assert extract_promo(["SIGN-UP", "Promocode: ABC123", "Join Now"], PolicyConfig()) is None


def test_rejects_marker_line_without_token():
    """A marker with nothing after it does not count as a code line"""
    assert extract_promo(["Nice Title Here", "Promocode:", "ABC"], PolicyConfig()) is None


def test_code_before_title_leaves_no_bullets():
    """Bullets only come from lines between title and code"""
    lines = ["Promocode: EARLY1", "Early Bird Special", "Line after the title"]

    record = extract_promo(lines, PolicyConfig())

    assert record is not None
    assert record.title == "Early Bird Special"
    assert record.code == "EARLY1"
    assert record.bullets == ()


def test_first_code_line_wins():
    """Only the first code line sets the code; later ones are not titles or bullets"""
    lines = ["Double Code Card", "Promocode: FIRST1", "Promocode: SECOND2"]

    record = extract_promo(lines, PolicyConfig())

    assert record is not None
    assert record.code == "FIRST1"


def test_plural_marker_word_is_not_a_code_line():
    """The plural marker word in prose neither sets the code nor hides the real code line"""
    lines = ["Weekly Reload Bonus", "Promocodes cannot be combined", "Up to $250", "Promocode: RELOAD50"]

    record = extract_promo(lines, PolicyConfig())

    assert record is not None
    assert record.code == "RELOAD50"
    assert record.title == "Weekly Reload Bonus"
    assert record.bullets == ("Promocodes cannot be combined", "Up to $250")


def test_policy_table_drives_extraction():
    """Marker phrase and vocabulary come from the policy, not constants"""
    policy = PolicyConfig(version=2, marker_phrase="Bonus Code", tag_vocabulary=["POKER"], ui_labels=["Play"])
    lines = ["POKER", "Poker Freeroll Series", "Play now", "Weekly $1,000 prize pool", "bonus code: roll5"]

    record = extract_promo(lines, policy)

    assert record == PromoRecord(
        title="Poker Freeroll Series",
        tags=("POKER",),
        bullets=("Weekly $1,000 prize pool",),
        code="ROLL5",
    )


def test_record_serializes_code_as_promocode():
    """Published document keeps the promocode field name"""
    record = PromoRecord(title="Welcome Bonus", tags=("SIGN-UP",), bullets=("Get 125%",), code="JOIN125")

    assert record.to_dict() == {
        "title": "Welcome Bonus",
        "tags": ["SIGN-UP"],
        "bullets": ["Get 125%"],
        "promocode": "JOIN125",
    }
