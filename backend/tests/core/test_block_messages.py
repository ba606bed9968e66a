"""Block Messages — tests for the denial explanation text.

Tests cover:
    - Every locale renders a non-empty message
    - Missing reason falls back to the generic phrase
    - Expiry rendered in the display timezone, day-first
    - Missing expiry rendered as indefinite
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from meedle.core.block_messages import format_block_until, render_block_explanation
from meedle.core.domain_types import Locale

KYIV = ZoneInfo("Europe/Kyiv")


def test_all_locales_render():
    for locale in Locale:
        text = render_block_explanation("spam", None, locale, timezone.utc)
        assert "spam" in text


def test_indefinite_term_ukrainian():
    assert format_block_until(None, Locale.UK, KYIV) == "безстроково"


def test_indefinite_term_english():
    assert format_block_until(None, Locale.EN, KYIV) == "indefinitely"


def test_until_converted_to_display_timezone():
    # 10:00 UTC in October is 13:00 in Kyiv (EEST, +03:00)
    until = datetime(2025, 10, 6, 10, 0, tzinfo=timezone.utc)
    assert format_block_until(until, Locale.UK, KYIV) == "до 06.10.2025 13:00"


def test_generic_reason_when_missing():
    text = render_block_explanation(None, None, Locale.EN, KYIV)
    assert text == (
        "Your account is blocked. Reason: violation of platform rules. "
        "Duration: indefinitely."
    )


def test_full_ukrainian_message():
    until = datetime(2025, 12, 31, 22, 0, tzinfo=timezone.utc)
    text = render_block_explanation("спам", until, Locale.UK, KYIV)
    assert text == (
        "Ваш акаунт заблоковано. Причина: спам. Термін: до 01.01.2026 00:00."
    )
