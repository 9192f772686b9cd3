"""Shared pytest fixtures for the sitecopy test suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from sitecopy.config import LocaleSettings, OverrideAlignment, SitecopyConfig
from sitecopy.models.datatypes import CleanPolicy
from sitecopy.schema.fields import LocalizedText, Nested, OrderedList, PageSchema, PlainText


@pytest.fixture(autouse=True)
def _isolate_sitecopy_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer `SITECOPY_*` environment variables out of every test."""

    for key in (
        "SITECOPY_DEFAULT_LOCALE",
        "SITECOPY_SUPPORTED_LOCALES",
        "SITECOPY_ALIGNMENT",
        "SITECOPY_INDENT",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def locales() -> LocaleSettings:
    """Provide the default `zh-CN`/`zh-TW`/`en` locale set."""

    return LocaleSettings()


@pytest.fixture
def seed_config() -> SitecopyConfig:
    """Provide a config aligning list overrides by content seed."""

    return SitecopyConfig(alignment=OverrideAlignment.SEED)


@pytest.fixture
def hero_schema() -> PageSchema:
    """Provide a small page with a keep-empty title and an optional subtitle."""

    return PageSchema(
        key="landing",
        title="Landing",
        root=Nested(
            {
                "hero": Nested(
                    {
                        "title": LocalizedText(policy=CleanPolicy.KEEP_EMPTY),
                        "subtitle": LocalizedText(omit_empty=True),
                    }
                )
            }
        ),
    )


@pytest.fixture
def list_schema() -> PageSchema:
    """Provide a page holding one list of slugged, labelled records."""

    return PageSchema(
        key="catalog",
        title="Catalog",
        root=Nested(
            {
                "items": OrderedList(
                    Nested({"slug": PlainText(), "label": LocalizedText()}),
                    id_prefix="item",
                    seed_fields=("slug",),
                )
            }
        ),
    )


@pytest.fixture
def three_items_raw() -> dict[str, Any]:
    """Provide a persisted catalog with three translated records."""

    return {
        "items": [
            {"slug": "a", "label": {"zh-CN": "甲", "en": "A"}},
            {"slug": "b", "label": {"zh-CN": "乙", "en": "B"}},
            {"slug": "c", "label": {"zh-CN": "丙", "en": "C"}},
        ]
    }


@pytest.fixture
def write_json(tmp_path: Path):
    """Provide a helper writing a JSON payload under `tmp_path`."""

    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return path

    return _write
