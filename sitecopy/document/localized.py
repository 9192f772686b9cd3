"""Per-locale text record helpers.

Responsibilities:
- Lift arbitrary JSON values into locale records restricted to the supported set.
- Read text with default-locale and priority fallback.
- Reduce records to their persisted form under a clean policy.

A locale key present with `""` means "explicitly cleared"; an absent key means
"never edited". Only `clean_for_persist` with the keep-empty policy carries the
first state through to storage.
"""

from __future__ import annotations

from typing import Mapping

from ..config import LocaleSettings
from ..models.datatypes import CleanPolicy, LocalizedValue


def ensure_record(value: object, locales: LocaleSettings) -> LocalizedValue:
    """Return a locale record for any JSON value without raising.

    Plain strings are lifted into `{default_locale: value}` for documents saved
    before the field became localized. Mappings keep only string entries of
    supported locales. Everything else yields an empty record.
    """

    if isinstance(value, str):
        return {locales.default_locale: value}
    if not isinstance(value, Mapping):
        return {}
    return {
        code: value[code]
        for code in locales.supported_locales
        if isinstance(value.get(code), str)
    }


def get_text(
    record: Mapping[str, str],
    locale: str,
    locales: LocaleSettings,
    fallback: str = "",
) -> str:
    """Return the best available text for `locale`.

    Lookup order is the requested locale, the default locale, then every
    supported locale in priority order; the first non-empty value wins.
    """

    for code in (locale, *locales.priority):
        text = record.get(code)
        if isinstance(text, str) and text.strip():
            return text
    return fallback


def set_text(record: Mapping[str, str], text: str, locale: str) -> LocalizedValue:
    """Return a new record with `locale` set to `text`."""

    updated = dict(record)
    updated[locale] = text
    return updated


def has_text(record: Mapping[str, object]) -> bool:
    """Return whether any locale entry has non-blank text."""

    return any(isinstance(text, str) and text.strip() for text in record.values())


def clean_for_persist(
    record: Mapping[str, str],
    policy: CleanPolicy,
    locales: LocaleSettings,
    required: bool = False,
) -> LocalizedValue:
    """Reduce a record to its persisted form.

    Args:
        record: Locale record from the editing document.
        policy: `DROP_EMPTY` keeps trimmed non-empty values only; `KEEP_EMPTY`
            keeps every supported key that is present, trimmed, including `""`.
        locales: Supported locale set.
        required: Return `{default_locale: ""}` rather than `{}` when nothing
            is left after cleaning.

    Returns:
        New record ordered by supported locale order.
    """

    cleaned: LocalizedValue = {}
    for code in locales.supported_locales:
        text = record.get(code)
        if not isinstance(text, str):
            continue
        trimmed = text.strip()
        if trimmed or policy is CleanPolicy.KEEP_EMPTY:
            cleaned[code] = trimmed
    if not cleaned and required:
        return {locales.default_locale: ""}
    return cleaned


def non_default_entries(record: Mapping[str, object], locales: LocaleSettings) -> LocalizedValue:
    """Return trimmed non-empty entries of supported non-default locales."""

    entries: LocalizedValue = {}
    for code in locales.secondary_locales:
        text = record.get(code)
        if isinstance(text, str) and text.strip():
            entries[code] = text.strip()
    return entries


def missing_locales(
    record: Mapping[str, str],
    locales: LocaleSettings,
    required: tuple[str, ...] | None = None,
) -> tuple[str, ...]:
    """Return required locales without non-blank text, in declared order."""

    codes = locales.supported_locales if required is None else required
    return tuple(
        code
        for code in codes
        if not (isinstance(record.get(code), str) and record[code].strip())
    )


def complete_record(
    record: Mapping[str, str],
    locales: LocaleSettings,
    fallback: str = "",
) -> LocalizedValue:
    """Return a display record where every supported locale has text.

    Missing locales are filled from `get_text`. The result is meant for
    previews only and must never be persisted, since it erases the difference
    between cleared and translated values.
    """

    return {
        code: get_text(record, code, locales, fallback)
        for code in locales.supported_locales
    }
