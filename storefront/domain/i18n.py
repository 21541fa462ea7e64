# storefront/domain/i18n.py
from typing import Any, Dict

LANGUAGES = ("en", "fr", "es")
DEFAULT_LOCALE = "en"

TranslationMap = Dict[str, str]


def normalize_translations(value: Any) -> TranslationMap:
    """Keep only the string values of a mapping; anything else yields {}."""
    if not isinstance(value, dict):
        return {}

    return {
        str(key): val
        for key, val in value.items()
        if isinstance(val, str)
    }


def get_localized_name(translations: Any, locale: str, fallback: str = "Unnamed") -> str:
    # requested locale -> english -> any -> fallback
    names = normalize_translations(translations)

    if names.get(locale):
        return names[locale]
    if names.get(DEFAULT_LOCALE):
        return names[DEFAULT_LOCALE]

    for name in names.values():
        if name:
            return name

    return fallback
