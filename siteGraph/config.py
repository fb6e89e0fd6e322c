"""
Site configuration loaded from a JSON file:

    {
      "name": "My Site",
      "description": "...",
      "databaseIds": ["<dbId>", ...],
      "locale": {"localeList": ["en", "ko"], "defaultLocale": "en"},
      "labels": {"en": {"allTags": "All tags"}, "ko": {"allTags": "전체 태그"}}
    }
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable


class ConfigError(ValueError):
    """Raised for a site config that is missing required settings."""


@dataclass
class SiteConfig:
    name: str
    default_locale: str
    locales: list[str] = field(default_factory=list)
    description: str = ""
    database_ids: list[str] = field(default_factory=list)
    labels: dict[str, dict[str, str]] = field(default_factory=dict)

    def translator(self, locale: str) -> Callable[[str], str]:
        """Label lookup for one locale; unknown keys come back unchanged."""
        table = self.labels.get(locale) or self.labels.get(self.default_locale) or {}

        def t(key: str) -> str:
            return table.get(key, key)

        return t

    @classmethod
    def from_dict(cls, raw: dict) -> "SiteConfig":
        name = raw.get("name")
        if not name:
            raise ConfigError("site config requires a 'name'")
        locale_cfg = raw.get("locale") or {}
        default_locale = locale_cfg.get("defaultLocale") or raw.get("language")
        if not default_locale:
            raise ConfigError("site config requires 'locale.defaultLocale'")
        locales = list(locale_cfg.get("localeList") or [default_locale])
        if default_locale not in locales:
            locales.insert(0, default_locale)
        return cls(
            name=name,
            default_locale=default_locale,
            locales=locales,
            description=raw.get("description") or "",
            database_ids=[str(d) for d in raw.get("databaseIds") or []],
            labels=raw.get("labels") or {},
        )


def load_site_config(path: Path) -> SiteConfig:
    """Load and validate the site config JSON."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    return SiteConfig.from_dict(raw)
