"""Message translation backed by YAML catalogs.

Catalogs live in ``i18n/messages/messages_<locale>.yaml`` as flat
``key: message`` mappings.  Messages take positional ``{0}``-style
arguments.
"""
from __future__ import annotations

import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


def default_catalog_dir() -> Path:
    return Path(__file__).resolve().parent / "messages"


def load_catalog(path: str | Path) -> dict[str, str]:
    """Load a single catalog file.

    Raises
    ------
    ValueError
        If the file is not a YAML mapping.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a YAML mapping, got {type(data).__name__}")

    return {str(key): str(value) for key, value in data.items()}


class Translator:
    """Resolve message keys for one process-wide locale."""

    def __init__(self, locale: str, catalog_dir: str | Path | None = None) -> None:
        self.locale = locale
        catalog_dir = Path(catalog_dir) if catalog_dir is not None else default_catalog_dir()
        path = catalog_dir / f"messages_{locale}.yaml"
        if not path.is_file():
            raise FileNotFoundError(f"No message catalog for locale {locale!r} in {catalog_dir}")
        self._messages = load_catalog(path)

    def translate(self, key: str, *args: object) -> str:
        message = self._messages.get(key)
        if message is None:
            logger.warning("Missing %s translation for key %s", self.locale, key)
            return key
        if not args:
            return message
        return message.format(*args)
