"""Registered page descriptors for the marketing site admin.

Each descriptor mirrors the persisted JSON shape of one page config. Clean
policies follow the editors that own the pages: footer and navigation drop
empty locale entries, while videos, contact, and product detail keep explicit
blanks so that a cleared translation is not refilled on the next load.
"""

from __future__ import annotations

from ..errors import SchemaError
from ..models.datatypes import CleanPolicy
from .fields import (
    Boolean,
    KeyedMap,
    LocalizedText,
    Nested,
    Number,
    OrderedList,
    PageSchema,
    Passthrough,
    PlainText,
)

MAX_FOOTER_PHONES = 3

_KEEP = CleanPolicy.KEEP_EMPTY

_required_text = LocalizedText(required=True)
_optional_text = LocalizedText(omit_empty=True)
_kept_text = LocalizedText(policy=_KEEP)


def _link(prefix: str) -> OrderedList:
    """Return a list of `{href, label}` links persisted only when `href` is set."""

    return OrderedList(
        Nested({"href": PlainText(), "label": _required_text}),
        id_prefix=prefix,
        seed_fields=("href",),
        keep_if=("href",),
    )


def _section_heading() -> Nested:
    return Nested({"eyebrow": _kept_text, "title": _kept_text, "description": _kept_text})


FOOTER_SCHEMA = PageSchema(
    key="footer",
    title="Footer",
    root=Nested(
        {
            "brand": Nested(
                {
                    "logo": PlainText(),
                    "name": _required_text,
                    "tagline": _optional_text,
                }
            ),
            "contact": Nested(
                {
                    "address": _required_text,
                    "phones": OrderedList(
                        Nested({"label": PlainText(), "href": PlainText()}),
                        id_prefix="phone",
                        seed_fields=("href", "label"),
                        keep_if=("label", "href"),
                        max_items=MAX_FOOTER_PHONES,
                    ),
                    "email": Nested({"label": PlainText(), "href": PlainText()}),
                }
            ),
            "navigationGroups": OrderedList(
                Nested({"title": _required_text, "links": _link("nav-link")}),
                id_prefix="nav-group",
                keep_if=("links",),
            ),
            "quickLinks": _link("quick-link"),
            "legal": Nested(
                {
                    "copyright": _required_text,
                    "icp": _optional_text,
                    "privacy": Nested({"label": _required_text, "href": PlainText()}),
                    "terms": Nested({"label": _required_text, "href": PlainText()}),
                }
            ),
            "_meta": Passthrough(),
        }
    ),
)


_navigation_child = Nested(
    {"slug": PlainText(), "href": PlainText(), "label": _required_text}
)

NAVIGATION_SCHEMA = PageSchema(
    key="navigation",
    title="Navigation",
    root=Nested(
        {
            "groups": OrderedList(
                Nested(
                    {
                        "key": PlainText(),
                        "title": LocalizedText(),
                        "links": OrderedList(
                            Nested(
                                {
                                    "slug": PlainText(),
                                    "href": PlainText(),
                                    "label": _required_text,
                                    "children": OrderedList(
                                        _navigation_child,
                                        id_prefix="nav-child",
                                        seed_fields=("slug", "href"),
                                        keep_if=("href",),
                                        omit_empty=True,
                                    ),
                                }
                            ),
                            id_prefix="nav-link",
                            seed_fields=("slug", "href"),
                        ),
                    }
                ),
                id_prefix="nav-group",
                seed_fields=("key",),
            ),
            "_meta": Passthrough(),
        }
    ),
)


VIDEOS_SCHEMA = PageSchema(
    key="videos",
    title="Video library",
    root=Nested(
        {
            "hero": Nested(
                {
                    "backgroundImage": PlainText(),
                    "eyebrow": _kept_text,
                    "title": _kept_text,
                    "description": _kept_text,
                }
            ),
            "sectionHeading": _section_heading(),
            "filters": OrderedList(
                Nested({"slug": PlainText(), "label": _kept_text}),
                id_prefix="filter",
                seed_fields=("slug",),
            ),
            "items": OrderedList(
                Nested(
                    {
                        "slug": PlainText(omit_empty=True),
                        "title": _kept_text,
                        "description": _kept_text,
                        "category": PlainText(default="all"),
                        "duration": PlainText(omit_empty=True),
                        "thumbnail": PlainText(),
                        "bvid": PlainText(omit_empty=True),
                        "tags": OrderedList(_kept_text, id_prefix="tag", skip_empty=True),
                    }
                ),
                id_prefix="video",
                seed_fields=("slug",),
                keep_if=("slug", "title", "description"),
            ),
            "_meta": Passthrough(),
        }
    ),
)


CONTACT_SCHEMA = PageSchema(
    key="contact",
    title="Contact",
    root=Nested(
        {
            "hero": Nested(
                {
                    "backgroundImage": PlainText(),
                    "eyebrow": _kept_text,
                    "title": _kept_text,
                    "description": _kept_text,
                    "overlayEnabled": Boolean(default=True),
                    "metrics": OrderedList(
                        Nested({"value": PlainText(), "label": _kept_text}),
                        id_prefix="metric",
                        keep_if=("value", "label"),
                    ),
                }
            ),
            "contactSection": Nested(
                {
                    "sectionHeading": _section_heading(),
                    "cards": OrderedList(
                        Nested(
                            {
                                "icon": PlainText(omit_empty=True),
                                "title": _kept_text,
                                "value": _kept_text,
                                "helper": _kept_text,
                                "href": PlainText(omit_empty=True),
                            }
                        ),
                        id_prefix="card",
                        seed_fields=("href",),
                        keep_if=("icon", "href", "title", "value"),
                    ),
                    "spotlight": Nested(
                        {"image": PlainText(), "eyebrow": _kept_text, "title": _kept_text}
                    ),
                }
            ),
            "connectSection": Nested(
                {
                    "sectionHeading": _section_heading(),
                    "highlights": OrderedList(
                        Nested({"title": _kept_text, "description": _kept_text}),
                        id_prefix="highlight",
                        keep_if=("title", "description"),
                    ),
                    "serviceNetworkCopy": Nested(
                        {"eyebrow": _kept_text, "description": _kept_text}
                    ),
                    "serviceHubs": OrderedList(
                        Nested({"name": _kept_text}),
                        id_prefix="hub",
                        keep_if=("name",),
                    ),
                    "formPanel": Nested(
                        {
                            "title": _kept_text,
                            "responseNote": _kept_text,
                            "nameLabel": _kept_text,
                            "emailLabel": _kept_text,
                            "phoneLabel": _kept_text,
                            "scenarioLabel": _kept_text,
                            "briefLabel": _kept_text,
                            "submitLabel": _kept_text,
                            "successMessage": _kept_text,
                            "errorMessage": _kept_text,
                            "scenarioOptions": OrderedList(
                                Nested({"value": PlainText(), "label": _kept_text}),
                                id_prefix="scenario",
                                seed_fields=("value",),
                            ),
                        }
                    ),
                }
            ),
            "guaranteeSection": Nested(
                {
                    "sectionHeading": _section_heading(),
                    "guarantees": OrderedList(
                        Nested(
                            {
                                "icon": PlainText(omit_empty=True),
                                "title": _kept_text,
                                "description": _kept_text,
                            }
                        ),
                        id_prefix="guarantee",
                        keep_if=("icon", "title", "description"),
                    ),
                }
            ),
            "_meta": Passthrough(),
        }
    ),
)


_pair = Nested({"label": _kept_text, "value": _kept_text})

_product_detail = Nested(
    {
        "title": _kept_text,
        "breadcrumb": OrderedList(PlainText(), id_prefix="crumb"),
        "hero": Nested(
            {
                "heading": _kept_text,
                "badge": _kept_text,
                "scenarios": _kept_text,
                "description": _kept_text,
                "viewGalleryLabel": _kept_text,
                "image": PlainText(),
            }
        ),
        "tabs": OrderedList(
            Nested({"id": PlainText(), "label": _kept_text}),
            id_prefix="tab",
            seed_fields=("id",),
        ),
        "sections": OrderedList(
            Nested(
                {
                    "id": PlainText(),
                    "heading": _kept_text,
                    "paragraphs": OrderedList(_kept_text, id_prefix="paragraph"),
                    "lists": OrderedList(
                        OrderedList(_kept_text, id_prefix="list-item"),
                        id_prefix="list",
                    ),
                    "pairs": OrderedList(
                        OrderedList(_pair, id_prefix="pair"),
                        id_prefix="pair-group",
                    ),
                }
            ),
            id_prefix="section",
            seed_fields=("id",),
        ),
        "gallery": OrderedList(
            Nested({"src": PlainText(), "alt": _kept_text}),
            id_prefix="gallery",
            seed_fields=("src",),
            keep_if=("src",),
        ),
        "intro": Nested(
            {
                "blocks": OrderedList(
                    Nested({"title": _kept_text, "subtitle": _kept_text, "image": PlainText()}),
                    id_prefix="intro-block",
                ),
            },
            omit_empty=True,
        ),
        "specs": Nested(
            {
                "columns": OrderedList(_kept_text, id_prefix="spec-column"),
                "rows": OrderedList(
                    OrderedList(_kept_text, id_prefix="spec-cell"),
                    id_prefix="spec-row",
                ),
                "caption": _kept_text,
            },
            omit_empty=True,
        ),
        "accessories": Nested(
            {
                "items": OrderedList(
                    Nested(
                        {
                            "title": _kept_text,
                            "description": _kept_text,
                            "image": PlainText(),
                            "price": Number(),
                        }
                    ),
                    id_prefix="accessory",
                ),
            },
            omit_empty=True,
        ),
        "cta": Nested(
            {
                "title": _kept_text,
                "description": _kept_text,
                "primaryLabel": _kept_text,
                "primaryHref": PlainText(),
                "phoneLabel": _kept_text,
                "phoneNumber": PlainText(),
            }
        ),
    }
)

PRODUCT_DETAIL_SCHEMA = PageSchema(
    key="product-detail",
    title="Product detail",
    root=KeyedMap(_product_detail, passthrough_keys=("_meta",)),
)


PAGE_SCHEMAS: dict[str, PageSchema] = {
    schema.key: schema
    for schema in (
        FOOTER_SCHEMA,
        NAVIGATION_SCHEMA,
        VIDEOS_SCHEMA,
        CONTACT_SCHEMA,
        PRODUCT_DETAIL_SCHEMA,
    )
}


def get_page_schema(key: str) -> PageSchema:
    """Return a registered page schema by key.

    Raises:
        SchemaError: If no page schema is registered under `key`.
    """

    try:
        return PAGE_SCHEMAS[key]
    except KeyError as exc:
        known = ", ".join(sorted(PAGE_SCHEMAS))
        raise SchemaError(f"Unknown page `{key}`. Known pages: {known}.") from exc
