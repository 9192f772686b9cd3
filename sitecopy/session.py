"""Editing session orchestration.

Responsibilities:
- Build the editing document and override map from one persisted input.
- Route text edits: default-locale edits go to the document, other locales to
  the override map (mirrored into the document so the editor shows them).
- Produce the save payload as `merge(serialize(document), overrides)`.
- Keep baseline and dirty state consistent across save, failure, and discard.

Key types:
- `EditingSession`: stateful facade used by one editor instance.
- `SaveWriter`: callable transport receiving the payload.
"""

from __future__ import annotations

from typing import Any, Callable

from .config import SitecopyConfig
from .document.dirty import DirtyState, DirtyTracker
from .document.edit import (
    format_path,
    get_in,
    insert_item,
    move_item,
    new_list_item,
    remove_item,
    set_in,
    set_localized_text,
    set_override_text,
)
from .document.extractor import OverrideExtractor
from .document.ids import list_alignment_keys
from .document.merger import OverrideMerger
from .document.normalizer import DocumentNormalizer
from .document.serializer import DocumentSerializer
from .errors import SchemaError
from .models.datatypes import STABLE_ID_KEY, DocumentPath, SaveOutcome
from .schema.fields import FieldKind, KeyedMap, LocalizedText, Nested, OrderedList, PageSchema
from .telemetry.logger import SessionLogger

SaveWriter = Callable[[Any], SaveOutcome]


def _count_leaves(overrides: Any) -> int:
    """Count locale records in an override map."""

    if not isinstance(overrides, dict) or not overrides:
        return 0
    if all(isinstance(value, str) for value in overrides.values()):
        return 1
    return sum(_count_leaves(value) for value in overrides.values())


class EditingSession:
    """In-memory editing state for one page document."""

    def __init__(
        self,
        schema: PageSchema,
        config: SitecopyConfig,
        logger: SessionLogger | None = None,
    ) -> None:
        """Initialize an empty session; use `open` to load a document."""

        self._schema = schema
        self._config = config
        self._logger = logger or SessionLogger(schema.key)
        self._normalizer = DocumentNormalizer(config.locales)
        self._extractor = OverrideExtractor(config.locales, config.alignment)
        self._serializer = DocumentSerializer(config.locales, config.alignment)
        self._document: Any = self._normalizer.normalize(None, schema)
        self._overrides: dict[Any, Any] = {}
        self._tracker = DirtyTracker(self.payload())

    @classmethod
    def open(
        cls,
        raw: object,
        schema: PageSchema,
        config: SitecopyConfig | None = None,
        logger: SessionLogger | None = None,
    ) -> EditingSession:
        """Create a session from persisted JSON (`None` or `{}` when absent)."""

        session = cls(schema, config or SitecopyConfig(), logger)
        session._load(raw)
        session._logger.log_loaded(session._config.alignment.value, _count_leaves(session._overrides))
        return session

    @property
    def schema(self) -> PageSchema:
        return self._schema

    @property
    def config(self) -> SitecopyConfig:
        return self._config

    @property
    def document(self) -> Any:
        """Current editing document. Treat as read-only."""

        return self._document

    @property
    def overrides(self) -> dict[Any, Any]:
        """Current override map. Treat as read-only."""

        return self._overrides

    @property
    def state(self) -> DirtyState:
        return self._tracker.state

    @property
    def is_dirty(self) -> bool:
        return self._tracker.is_dirty

    def payload(self) -> Any:
        """Return the payload a save would write right now."""

        return self._merge(report_unmatched=False)

    def edit_text(self, path: DocumentPath, text: str, locale: str | None = None) -> None:
        """Set one locale of the localized field at `path`.

        Raises:
            SchemaError: If `path` does not address a localized field, or
                `locale` is not supported.
        """

        locales = self._config.locales
        target_locale = locale or locales.default_locale
        if not locales.is_supported(target_locale):
            raise SchemaError(f"Locale `{target_locale}` is not supported.")
        override_path = self._override_path(path)

        self._document = set_localized_text(self._document, path, text, target_locale, locales)
        if target_locale != locales.default_locale:
            self._overrides = set_override_text(self._overrides, override_path, target_locale, text)
        self._logger.log_edit("text", format_path(path), target_locale)
        self._tracker.observe(self.payload())

    def set_value(self, path: DocumentPath, value: Any) -> None:
        """Replace a plain scalar (string, number, boolean) at `path`."""

        kind = self._kind_at(path)
        if isinstance(kind, LocalizedText | Nested | OrderedList | KeyedMap):
            raise SchemaError(f"Path `{format_path(path)}` is not a scalar field.")
        self._document = set_in(self._document, path, value)
        self._logger.log_edit("value", format_path(path))
        self._tracker.observe(self.payload())

    def replace_document(self, document: Any) -> None:
        """Replace the whole editing document, e.g. after a bulk edit."""

        self._document = document
        self._logger.log_edit("replace", "/")
        self._tracker.observe(self.payload())

    def insert_item(self, path: DocumentPath, index: int | None = None) -> Any:
        """Insert a default-valued element into the list at `path` and return it."""

        kind = self._list_kind(path)
        item = new_list_item(kind, self._config.locales)
        self._document = insert_item(self._document, path, item, index)
        self._logger.log_edit("insert", format_path(path))
        self._tracker.observe(self.payload())
        return item

    def remove_item(self, path: DocumentPath, index: int) -> None:
        """Remove one element from the list at `path`.

        Under positional alignment, overrides are left in place, so the
        following elements inherit the translations of their predecessors.
        """

        self._list_kind(path)
        self._document = remove_item(self._document, path, index)
        self._logger.log_edit("remove", format_path(path + (index,)))
        self._tracker.observe(self.payload())

    def move_item(self, path: DocumentPath, source: int, target: int) -> None:
        """Move one element of the list at `path`."""

        self._list_kind(path)
        self._document = move_item(self._document, path, source, target)
        self._logger.log_edit("move", format_path(path + (source,)))
        self._tracker.observe(self.payload())

    def item_ids(self, path: DocumentPath) -> list[str]:
        """Return the stable ids of the record list at `path`."""

        self._list_kind(path)
        items = get_in(self._document, path, [])
        return [item.get(STABLE_ID_KEY, "") for item in items if isinstance(item, dict)]

    def save(self, writer: SaveWriter) -> SaveOutcome:
        """Write the current payload and adopt it as baseline on success.

        On failure, whether reported by the outcome or raised by the writer,
        document, overrides, and baseline stay untouched, so a retry writes
        the same payload.
        """

        payload = self._merge(report_unmatched=True)
        self._logger.log_save_start()
        try:
            outcome = writer(payload)
        except Exception as exc:
            self._logger.log_save_failure(type(exc).__name__)
            return SaveOutcome.error(str(exc) or type(exc).__name__)

        if not outcome.ok:
            self._logger.log_save_failure("SaveOutcome")
            return outcome

        self._tracker.mark_saved(payload)
        self._logger.log_save_complete()
        return outcome

    def discard(self) -> None:
        """Drop unsaved edits and rebuild state from the baseline payload."""

        baseline = self._tracker.discard()
        self._document = self._normalizer.normalize(baseline, self._schema)
        self._overrides = self._extractor.extract(baseline, self._schema)
        self._logger.log_discard()

    def reload(self, raw: object) -> None:
        """Replace all session state with a superseding persisted input."""

        self._load(raw)
        self._logger.log_reload()

    def _load(self, raw: object) -> None:
        self._document = self._normalizer.normalize(raw, self._schema)
        self._overrides = self._extractor.extract(raw, self._schema)
        self._tracker = DirtyTracker(self.payload())

    def _merge(self, report_unmatched: bool) -> Any:
        def _report(path: DocumentPath) -> None:
            self._logger.log_unmatched_override(format_path(path))

        merger = OverrideMerger(
            self._config.locales,
            self._config.alignment,
            _report if report_unmatched else None,
        )
        serialized, list_keys = self._serializer.serialize_with_keys(self._document, self._schema)
        return merger.merge(serialized, self._overrides, self._schema, list_keys)

    def _kind_at(self, path: DocumentPath) -> FieldKind:
        """Return the field kind addressed by a document path."""

        kind: FieldKind = self._schema.root
        for segment in path:
            if isinstance(kind, Nested) and isinstance(segment, str) and segment in kind.fields:
                kind = kind.fields[segment]
            elif isinstance(kind, OrderedList) and isinstance(segment, int):
                kind = kind.item
            elif isinstance(kind, KeyedMap) and isinstance(segment, str):
                kind = kind.value
            else:
                raise SchemaError(f"Path `{format_path(path)}` does not match page `{self._schema.key}`.")
        return kind

    def _list_kind(self, path: DocumentPath) -> OrderedList:
        kind = self._kind_at(path)
        if not isinstance(kind, OrderedList):
            raise SchemaError(f"Path `{format_path(path)}` is not a list field.")
        return kind

    def _override_path(self, path: DocumentPath) -> DocumentPath:
        """Translate a document path into the override map's key space."""

        kind: FieldKind = self._schema.root
        node: Any = self._document
        translated: list[str | int] = []
        for position, segment in enumerate(path):
            if isinstance(kind, OrderedList) and isinstance(segment, int):
                items = node if isinstance(node, list) else []
                if not 0 <= segment < len(items):
                    raise SchemaError(f"Path `{format_path(path)}` points past the end of a list.")
                keys = list_alignment_keys(kind, items, self._config.locales, self._config.alignment)
                translated.append(keys[segment])
                node, kind = items[segment], kind.item
                continue
            kind = self._kind_at(path[: position + 1])
            translated.append(segment)
            node = node.get(segment) if isinstance(node, dict) else None
        if not isinstance(kind, LocalizedText):
            raise SchemaError(f"Path `{format_path(path)}` is not a localized text field.")
        return tuple(translated)
