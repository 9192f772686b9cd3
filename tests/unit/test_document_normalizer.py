"""Unit tests for schema-driven normalization into editing documents."""

from __future__ import annotations

import copy

import pytest

from sitecopy.config import LocaleSettings
from sitecopy.document.normalizer import DocumentNormalizer, normalize
from sitecopy.schema.fields import Boolean, Nested, Number, OrderedList, PageSchema, Passthrough, PlainText
from sitecopy.schema.pages import FOOTER_SCHEMA, PRODUCT_DETAIL_SCHEMA


@pytest.mark.parametrize("raw", [None, {}, [], "footer", 42, {"brand": [1, 2], "quickLinks": "nope"}])
def test_normalize_is_total_for_malformed_input(raw: object, locales: LocaleSettings) -> None:
    """Any JSON value should normalize into a fully default-valued document."""

    document = normalize(raw, FOOTER_SCHEMA, locales)

    assert document["brand"] == {"logo": "", "name": {}, "tagline": {}}
    assert document["contact"] == {
        "address": {},
        "phones": [],
        "email": {"label": "", "href": ""},
    }
    assert document["quickLinks"] == []
    assert document["navigationGroups"] == []
    assert document["legal"]["privacy"] == {"label": {}, "href": ""}
    assert document["_meta"] is None


def test_normalize_lifts_legacy_strings_and_filters_locales(locales: LocaleSettings) -> None:
    """Plain strings become default-locale records; unsupported locales vanish."""

    raw = {
        "brand": {
            "name": "Acme",
            "tagline": {"zh-CN": "口号", "fr": "Slogan", "en": 3},
        }
    }

    document = normalize(raw, FOOTER_SCHEMA, locales)

    assert document["brand"]["name"] == {"zh-CN": "Acme"}
    assert document["brand"]["tagline"] == {"zh-CN": "口号"}


def test_normalize_assigns_seeded_ids_to_list_records(locales: LocaleSettings) -> None:
    """List records should receive `_id` values seeded from content."""

    raw = {
        "quickLinks": [
            {"href": "/about", "label": "About"},
            {"href": "", "label": {"zh-CN": "联系"}},
            {"href": "/about", "label": "Again"},
        ]
    }

    links = normalize(raw, FOOTER_SCHEMA, locales)["quickLinks"]

    assert [link["_id"] for link in links] == [
        "quick-link-about",
        "quick-link-1",
        "quick-link-about-2",
    ]
    assert links[0] == {"_id": "quick-link-about", "href": "/about", "label": {"zh-CN": "About"}}


def test_normalize_ids_are_stable_across_unrelated_changes(locales: LocaleSettings) -> None:
    """Changing an unrelated field must not change list ids."""

    raw = {
        "brand": {"name": "Acme"},
        "quickLinks": [{"href": "/a", "label": "A"}, {"href": "/b", "label": "B"}],
    }
    trimmed = copy.deepcopy(raw)
    del trimmed["brand"]

    first = normalize(raw, FOOTER_SCHEMA, locales)
    second = normalize(raw, FOOTER_SCHEMA, locales)
    third = normalize(trimmed, FOOTER_SCHEMA, locales)

    assert first == second
    assert [link["_id"] for link in first["quickLinks"]] == [
        link["_id"] for link in third["quickLinks"]
    ]


def test_normalize_coerces_scalars_with_defaults(locales: LocaleSettings) -> None:
    """Numbers, booleans, and plain text should parse permissively."""

    schema = PageSchema(
        key="scalars",
        root=Nested(
            {
                "count": Number(default=1),
                "flag": Boolean(default=True),
                "name": PlainText(default="x"),
                "extra": Passthrough(),
            }
        ),
    )
    normalizer = DocumentNormalizer(locales)

    assert normalizer.normalize(
        {"count": "12", "flag": "no", "name": 5, "extra": {"a": [1]}}, schema
    ) == {"count": 12, "flag": False, "name": "x", "extra": {"a": [1]}}
    assert normalizer.normalize({"count": True, "flag": "maybe"}, schema) == {
        "count": 1,
        "flag": True,
        "name": "x",
        "extra": None,
    }


def test_normalize_scalar_lists_have_no_ids(locales: LocaleSettings) -> None:
    """Lists of scalars or locale records should not be wrapped with ids."""

    kind = OrderedList(PlainText())

    assert DocumentNormalizer(locales).normalize_value(["a", 3, None], kind) == ["a", "", ""]


def test_normalize_keyed_map_copies_passthrough_keys(locales: LocaleSettings) -> None:
    """Map entries normalize by value kind; `_meta` is copied verbatim."""

    raw = {
        "_meta": {"updatedAt": "2024-01-01T00:00:00.000Z"},
        "scanner-x": {"title": "Scanner X", "breadcrumb": ["Home", 5]},
    }

    document = normalize(raw, PRODUCT_DETAIL_SCHEMA, locales)

    assert document["_meta"] == {"updatedAt": "2024-01-01T00:00:00.000Z"}
    assert document["_meta"] is not raw["_meta"]
    assert document["scanner-x"]["title"] == {"zh-CN": "Scanner X"}
    assert document["scanner-x"]["breadcrumb"] == ["Home", ""]
    assert document["scanner-x"]["sections"] == []
