# File: user_api/core/i18n.py

"""
Message catalogues for user-facing error messages.

Catalogues live in user_api/i18n/<lang>.json as nested objects, looked up
by dotted keys such as "USER.NOT_FOUND".
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

I18N_DIR = Path(__file__).resolve().parent.parent / "i18n"


def normalize_language(lang: Optional[str]) -> Optional[str]:
    """'en-US' -> 'en', 'ID' -> 'id', '' -> None."""
    if not lang:
        return None
    lang = lang.strip().replace("_", "-").split("-")[0].lower()
    return lang or None


def parse_accept_language(header: Optional[str]) -> Optional[str]:
    """Return the first language tag of an Accept-Language header."""
    if not header:
        return None
    first = header.split(",")[0].split(";")[0].strip()
    if first == "*":
        return None
    return normalize_language(first)


def load_catalogues(directory: Path = I18N_DIR) -> Dict[str, Dict[str, Any]]:
    catalogues: Dict[str, Dict[str, Any]] = {}
    for path in sorted(directory.glob("*.json")):
        with open(path, "r", encoding="utf-8") as f:
            catalogues[path.stem.lower()] = json.load(f)
    return catalogues


class Translator:
    def __init__(
        self,
        catalogues: Optional[Dict[str, Dict[str, Any]]] = None,
        default_language: str = "en",
    ):
        self.catalogues = catalogues if catalogues is not None else load_catalogues()
        self.default_language = normalize_language(default_language) or "en"

    @property
    def languages(self) -> list[str]:
        return sorted(self.catalogues)

    def resolve_language(self, lang: Optional[str]) -> str:
        lang = normalize_language(lang)
        if lang and lang in self.catalogues:
            return lang
        return self.default_language

    def translate(self, key: str, lang: Optional[str] = None) -> str:
        """
        Look up `key` in the requested language, then in the default one.

        Falls back to the key itself when neither catalogue has it.
        """
        for candidate in (self.resolve_language(lang), self.default_language):
            message = self._lookup(self.catalogues.get(candidate, {}), key)
            if message is not None:
                return message
        logger.warning("Missing translation for key %s", key)
        return key

    @staticmethod
    def _lookup(catalogue: Dict[str, Any], key: str) -> Optional[str]:
        node: Any = catalogue
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node if isinstance(node, str) else None
