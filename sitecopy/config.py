"""Configuration model and loaders for sitecopy.

Responsibilities:
- Define locale and override-alignment settings as typed dataclasses.
- Provide loader entry points for file- and environment-based configuration.
- Keep the process-wide default only as a convenience for outer entry points;
  engine functions always receive settings explicitly.

Key types:
- `LocaleSettings`: default locale, supported locales, and lookup priority.
- `OverrideAlignment`: how list overrides are matched back at merge time.
- `SitecopyConfig`: normalized settings for one CLI run or editing session.
- `ConfigLoader`: static construction helpers for `SitecopyConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import normalize_optional_string


_DEFAULT_LOCALE = "zh-CN"
_DEFAULT_SUPPORTED_LOCALES = ("zh-CN", "zh-TW", "en")
_DEFAULT_INDENT = 2


class OverrideAlignment(str, Enum):
    """Strategy used to match list overrides with list elements.

    Attributes:
        POSITION: Overrides follow array indices (compatible with stored data).
        SEED: Overrides follow each element's content-seeded stable id, so
            reordering or deleting elements keeps translations attached.
    """

    POSITION = "position"
    SEED = "seed"


@dataclass(frozen=True, slots=True)
class LocaleSettings:
    """Closed locale set used by every localized field.

    Attributes:
        default_locale: Locale edited directly in the editing document.
        supported_locales: Ordered set of locale codes that may be persisted.
    """

    default_locale: str = _DEFAULT_LOCALE
    supported_locales: tuple[str, ...] = _DEFAULT_SUPPORTED_LOCALES

    def __post_init__(self) -> None:
        """Validate locale codes at construction time."""

        self.validate()

    def validate(self) -> None:
        """Validate that locale codes are non-blank, unique, and consistent."""

        if not self.supported_locales:
            raise ValueError("`supported_locales` must list at least one locale.")
        seen: set[str] = set()
        for code in self.supported_locales:
            if not isinstance(code, str) or not code.strip() or code != code.strip():
                raise ValueError(f"Invalid locale code `{code}` in `supported_locales`.")
            if code in seen:
                raise ValueError(f"Duplicate locale code `{code}` in `supported_locales`.")
            seen.add(code)
        if self.default_locale not in seen:
            supported = ", ".join(self.supported_locales)
            raise ValueError(
                f"`default_locale` `{self.default_locale}` is not one of: {supported}."
            )

    @property
    def priority(self) -> tuple[str, ...]:
        """Return lookup order: default locale first, then declared order."""

        return (self.default_locale,) + tuple(
            code for code in self.supported_locales if code != self.default_locale
        )

    @property
    def secondary_locales(self) -> tuple[str, ...]:
        """Return supported locales other than the default one."""

        return self.priority[1:]

    def is_supported(self, code: object) -> bool:
        """Return whether a locale code belongs to the supported set."""

        return isinstance(code, str) and code in self.supported_locales


DEFAULT_LOCALE_SETTINGS = LocaleSettings()


@dataclass(slots=True)
class SitecopyConfig:
    """Runtime configuration for one CLI run or editing session.

    Attributes:
        locales: Locale set and default locale.
        alignment: List override alignment strategy.
        indent: Indentation used when printing or writing JSON.
        extra: Additional metadata for future extensions.
    """

    locales: LocaleSettings = DEFAULT_LOCALE_SETTINGS
    alignment: OverrideAlignment = OverrideAlignment.POSITION
    indent: int = _DEFAULT_INDENT
    extra: dict[str, str] = field(default_factory=dict)

    def validate(self) -> None:
        """Validate configuration values before use."""

        self.locales.validate()
        if not isinstance(self.alignment, OverrideAlignment):
            raise ValueError("`alignment` must be an `OverrideAlignment` value.")
        if self.indent < 0:
            raise ValueError("`indent` must be zero or a positive integer.")


class ConfigLoader:
    """Factory methods for creating `SitecopyConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "default_locale",
            "supported_locales",
            "alignment",
            "indent",
            "extra",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> SitecopyConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> SitecopyConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        supported = ConfigLoader._optional_env_string(env_map, "SITECOPY_SUPPORTED_LOCALES")
        supported_locales = (
            ConfigLoader._split_locale_list(supported)
            if supported is not None
            else _DEFAULT_SUPPORTED_LOCALES
        )
        default_locale = (
            ConfigLoader._optional_env_string(env_map, "SITECOPY_DEFAULT_LOCALE")
            or supported_locales[0]
        )
        alignment_token = ConfigLoader._optional_env_string(env_map, "SITECOPY_ALIGNMENT")
        alignment = ConfigLoader._parse_alignment(
            alignment_token, "Environment variable `SITECOPY_ALIGNMENT`"
        )
        indent = ConfigLoader._optional_env_indent(env_map, "SITECOPY_INDENT")

        config = SitecopyConfig(
            locales=LocaleSettings(
                default_locale=default_locale,
                supported_locales=supported_locales,
            ),
            alignment=alignment,
            indent=_DEFAULT_INDENT if indent is None else indent,
        )
        config.validate()
        return config

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` is not valid YAML: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> SitecopyConfig:
        """Build a validated config from a normalized mapping payload."""

        unknown = sorted(str(key) for key in set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        supported_locales = ConfigLoader._optional_locale_list(
            payload, "supported_locales", source_label
        ) or _DEFAULT_SUPPORTED_LOCALES
        default_locale = (
            ConfigLoader._optional_non_empty_string(payload, "default_locale")
            or supported_locales[0]
        )
        alignment = ConfigLoader._parse_alignment(
            ConfigLoader._optional_non_empty_string(payload, "alignment"),
            f"{source_label} field `alignment`",
        )
        indent = ConfigLoader._optional_indent(payload, "indent", source_label)
        extra = ConfigLoader._optional_string_map(payload, "extra", source_label)

        try:
            locales = LocaleSettings(
                default_locale=default_locale,
                supported_locales=supported_locales,
            )
        except ValueError as exc:
            raise ValueError(f"{source_label}: {exc}") from exc

        config = SitecopyConfig(
            locales=locales,
            alignment=alignment,
            indent=indent,
            extra=extra,
        )
        config.validate()
        return config

    @staticmethod
    def _optional_non_empty_string(payload: Mapping[str, Any], key: str) -> str | None:
        """Read an optional string field and normalize blank values to `None`."""

        if key not in payload:
            return None
        return normalize_optional_string(payload[key])

    @staticmethod
    def _optional_locale_list(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> tuple[str, ...] | None:
        """Read a locale list given as a YAML sequence or comma-separated string."""

        if key not in payload or payload[key] is None:
            return None
        raw = payload[key]
        if isinstance(raw, str):
            return ConfigLoader._split_locale_list(raw)
        if not isinstance(raw, list):
            raise ValueError(f"{source_label} field `{key}` must be a list of locale codes.")

        codes: list[str] = []
        for item in raw:
            code = normalize_optional_string(item)
            if code is None:
                raise ValueError(f"{source_label} field `{key}` contains a blank locale code.")
            codes.append(code)
        return tuple(codes) or None

    @staticmethod
    def _split_locale_list(raw: str) -> tuple[str, ...]:
        """Split a comma-separated locale list, ignoring blank items."""

        return tuple(part.strip() for part in raw.split(",") if part.strip())

    @staticmethod
    def _parse_alignment(token: str | None, label: str) -> OverrideAlignment:
        """Parse an alignment token, defaulting to positional alignment."""

        if token is None:
            return OverrideAlignment.POSITION
        try:
            return OverrideAlignment(token.lower())
        except ValueError as exc:
            supported = ", ".join(item.value for item in OverrideAlignment)
            raise ValueError(f"{label} must be one of: {supported}.") from exc

    @staticmethod
    def _optional_indent(payload: Mapping[str, Any], key: str, source_label: str) -> int:
        """Read and validate a non-negative integer payload field."""

        if key not in payload:
            return _DEFAULT_INDENT
        raw_value = payload[key]
        if isinstance(raw_value, bool):
            raise ValueError(f"{source_label} field `{key}` must be a non-negative integer.")
        if isinstance(raw_value, int):
            parsed = raw_value
        else:
            normalized = normalize_optional_string(raw_value)
            if normalized is None:
                return _DEFAULT_INDENT
            try:
                parsed = int(normalized)
            except ValueError as exc:
                raise ValueError(
                    f"{source_label} field `{key}` must be a non-negative integer."
                ) from exc
        if parsed < 0:
            raise ValueError(f"{source_label} field `{key}` must be a non-negative integer.")
        return parsed

    @staticmethod
    def _optional_string_map(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> dict[str, str]:
        """Read an optional mapping with non-empty string keys and values."""

        if key not in payload or payload[key] is None:
            return {}
        raw = payload[key]
        if not isinstance(raw, Mapping):
            raise ValueError(f"{source_label} field `{key}` must be a mapping/object.")

        normalized: dict[str, str] = {}
        for raw_key, raw_value in raw.items():
            key_value = normalize_optional_string(raw_key)
            value_value = normalize_optional_string(raw_value)
            if key_value is None:
                raise ValueError(f"{source_label} field `{key}` contains a blank key.")
            if value_value is None:
                raise ValueError(
                    f"{source_label} field `{key}` contains blank value for `{key_value}`."
                )
            normalized[key_value] = value_value
        return normalized

    @staticmethod
    def _optional_env_string(env: Mapping[str, str], key: str) -> str | None:
        """Read and normalize optional string environment variable values."""

        if key not in env:
            return None
        return normalize_optional_string(env.get(key))

    @staticmethod
    def _optional_env_indent(env: Mapping[str, str], key: str) -> int | None:
        """Read an optional non-negative integer from environment mapping."""

        raw_value = ConfigLoader._optional_env_string(env, key)
        if raw_value is None:
            return None
        try:
            parsed = int(raw_value)
        except ValueError as exc:
            raise ValueError(
                f"Environment variable `{key}` must be a non-negative integer."
            ) from exc
        if parsed < 0:
            raise ValueError(f"Environment variable `{key}` must be a non-negative integer.")
        return parsed
