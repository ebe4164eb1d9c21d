"""Message catalogs and lookup for the configured locale."""
from legalconsult.i18n.translator import Translator, default_catalog_dir

__all__ = ["Translator", "default_catalog_dir"]
