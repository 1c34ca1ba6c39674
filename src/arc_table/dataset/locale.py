"""
Locale map detection and resolution.

A locale map is a nested object carrying the same text in several
languages, e.g. ``{"en": "Shield", "fr": "Bouclier"}``, optionally with a
raw ``value`` next to the translations.

Detection uses the closed set of locale codes in
``game_data.models.LOCALE_CODES``: every key must be a known locale code or
the literal ``value``, and at least one key must be a locale code. An
object that merely happens to contain ``en`` next to unrelated keys is
not a locale map.
"""

from typing import Any, Dict, Optional

from ..game_data.models import LOCALE_CODES, LOCALE_VALUE_KEY

FALLBACK_LANGUAGE = "en"


def is_locale_map(obj: Any) -> bool:
    """Return True if ``obj`` is a localization map."""
    if not isinstance(obj, dict) or not obj:
        return False

    has_locale = False
    for key in obj:
        if key == LOCALE_VALUE_KEY:
            continue
        if not isinstance(key, str) or key.lower() not in LOCALE_CODES:
            return False
        has_locale = True
    return has_locale


def pick_locale(obj: dict, target_lang: str = FALLBACK_LANGUAGE) -> Any:
    """Collapse a locale map to a single value.

    Fallback chain: target language, ``en``, ``value``, first declared
    entry, empty string. Keys match case-insensitively, as in
    ``is_locale_map``. Entries holding ``None`` count as absent.
    """
    by_code: Dict[str, Any] = {}
    for key, value in obj.items():
        if isinstance(key, str) and value is not None:
            by_code.setdefault(key.lower(), value)

    for key in (target_lang.lower(), FALLBACK_LANGUAGE, LOCALE_VALUE_KEY):
        value = by_code.get(key)
        if value is not None:
            return value
    for value in obj.values():
        if value is not None:
            return value
    return ""


def resolve_display_name(name: Any, target_lang: str = FALLBACK_LANGUAGE) -> Optional[str]:
    """Turn a raw ``name`` field into display text.

    Locale maps are resolved; plain scalars are used as-is. Missing names
    and names that are still structured after resolution give None.
    """
    if is_locale_map(name):
        name = pick_locale(name, target_lang)
    if name is None or isinstance(name, (dict, list)):
        return None
    return name if isinstance(name, str) else display_text(name)


def display_text(value: Any) -> str:
    """Render a scalar the way JSON text shows it (``true``, ``null``, ``5``)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
