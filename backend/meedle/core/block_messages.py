"""Block Messages — locale-specific text explaining why login was denied.

Invariants:
    - All strings are pure data (no IO, no computation beyond formatting)
    - Covers every locale in the Locale enum
    - blocked_until rendered in the caller-supplied timezone, day-first 24h clock

Design Decisions:
    - Templates keyed by Locale, same as every other user-facing string table
    - Ukrainian is the product language; English kept for API clients and tests
"""

from datetime import datetime, tzinfo

from meedle.core.domain_types import Locale

_DATETIME_FORMAT = "%d.%m.%Y %H:%M"

_BLOCKED_TEMPLATE: dict[Locale, str] = {
    Locale.UK: "Ваш акаунт заблоковано. Причина: {reason}. Термін: {term}.",
    Locale.EN: "Your account is blocked. Reason: {reason}. Duration: {term}.",
}

_GENERIC_REASON: dict[Locale, str] = {
    Locale.UK: "порушення правил платформи",
    Locale.EN: "violation of platform rules",
}

_INDEFINITE_TERM: dict[Locale, str] = {
    Locale.UK: "безстроково",
    Locale.EN: "indefinitely",
}

_UNTIL_TERM: dict[Locale, str] = {
    Locale.UK: "до {until}",
    Locale.EN: "until {until}",
}

_PENDING_CONFIRMATION: dict[Locale, str] = {
    Locale.UK: "Ваш акаунт ще не активовано адміністратором",
    Locale.EN: "Your account has not been activated by an administrator yet",
}


def format_block_until(
    blocked_until: datetime | None, locale: Locale, display_tz: tzinfo,
) -> str:
    """Render the block term: a local date-time, or the 'indefinite' phrase."""
    if blocked_until is None:
        return _INDEFINITE_TERM[locale]
    local = blocked_until.astimezone(display_tz)
    return _UNTIL_TERM[locale].format(until=local.strftime(_DATETIME_FORMAT))


def render_block_explanation(
    reason: str | None,
    blocked_until: datetime | None,
    locale: Locale,
    display_tz: tzinfo,
) -> str:
    """Compose the denial explanation from reason and expiry."""
    return _BLOCKED_TEMPLATE[locale].format(
        reason=reason or _GENERIC_REASON[locale],
        term=format_block_until(blocked_until, locale, display_tz),
    )


def render_pending_confirmation(locale: Locale) -> str:
    """Denial text for a registration the administrator has not confirmed yet."""
    return _PENDING_CONFIRMATION[locale]
