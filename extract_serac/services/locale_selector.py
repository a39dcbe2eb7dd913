"""
Locale Selector

Picks the single language a report (or an area) is rendered in.

Selection walks a fixed preference list and returns the first language the
document is available in; documents written only in other languages fall
back to their first available language. Reports and their areas are
selected independently, so one row may mix languages.
"""
from typing import Optional, Sequence, TypeVar

from extract_serac.config import settings
from extract_serac.exceptions import NoLocaleAvailable

PREFERRED_LANGS = ("fr", "en", "it", "es", "de", "ca", "eu")

LocaleT = TypeVar("LocaleT")


def select_locale(
    available_langs: Sequence[str],
    preferred: Optional[Sequence[str]] = None,
) -> str:
    """
    Select the best language among those available.

    Args:
        available_langs: Language codes the document exists in
        preferred: Preference order (defaults to settings.preferred_langs)

    Returns:
        A language code taken from available_langs

    Raises:
        NoLocaleAvailable: available_langs is empty

    Example:
        >>> select_locale(["de", "fr", "it"])
        'fr'
        >>> select_locale(["pt"])
        'pt'
    """
    if not available_langs:
        raise NoLocaleAvailable("No language available to select a locale from")

    if preferred is None:
        preferred = settings.preferred_langs or PREFERRED_LANGS

    for lang in preferred:
        if lang in available_langs:
            return lang

    return available_langs[0]


def find_locale(
    locales: Sequence[LocaleT],
    available_langs: Optional[Sequence[str]] = None,
    preferred: Optional[Sequence[str]] = None,
) -> LocaleT:
    """
    Return the locale object to read a document from.

    The language is selected from available_langs when given, otherwise from
    the languages of the locales themselves. A selected language without a
    locale body is ignored and the selection is redone against the locales
    actually present.

    Raises:
        NoLocaleAvailable: no locale at all
    """
    if not locales:
        raise NoLocaleAvailable("Document has no locale")

    by_lang = {}
    for locale in locales:
        by_lang.setdefault(locale.lang, locale)

    if available_langs:
        lang = select_locale(available_langs, preferred)
        if lang in by_lang:
            return by_lang[lang]

    return by_lang[select_locale([locale.lang for locale in locales], preferred)]
