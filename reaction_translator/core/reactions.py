"""Reaction-to-language table and lookup.

WHY: Users request a translation by reacting with a flag emoji. Slack names
those reactions either directly after the country (":jp:", ":fr:") or with
a "flag-" prefix (":flag-jp:", ":flag-br:"). Both spellings must resolve to
the same DeepL target language.

HOW: REACTION_TO_LANG maps ISO 3166 country codes to DeepL target language
codes. lookup_language() strips the flag prefix when present and looks the
remainder up; otherwise it looks the raw reaction name up.

RULES:
- "flag-xx" resolves exactly like "xx"
- Unknown reactions return None ("no action"), never raise
- Values are lowercase DeepL codes; callers upper-case them for the API
"""

from __future__ import annotations

from typing import Mapping, Optional

FLAG_PREFIX = "flag-"

# ---------------------------------------------------------------------------
# Country code → DeepL target language
# ---------------------------------------------------------------------------

REACTION_TO_LANG: dict[str, str] = {
    # English
    "us": "en-us",
    "um": "en-us",
    "gb": "en-gb",
    "uk": "en-gb",
    "england": "en-gb",
    "scotland": "en-gb",
    "wales": "en-gb",
    "ie": "en-gb",
    "au": "en-gb",
    "nz": "en-gb",
    "ca": "en-us",
    "in": "en-gb",
    "sg": "en-gb",
    "za": "en-gb",
    "ph": "en-us",
    # Arabic
    "ae": "ar",
    "sa": "ar",
    "eg": "ar",
    "ma": "ar",
    "qa": "ar",
    # Chinese
    "cn": "zh-hans",
    "tw": "zh-hant",
    "hk": "zh-hant",
    "mo": "zh-hant",
    # Other European and Asian languages supported by DeepL
    "bg": "bg",
    "cz": "cs",
    "dk": "da",
    "de": "de",
    "at": "de",
    "li": "de",
    "gr": "el",
    "cy": "el",
    "es": "es",
    "mx": "es",
    "ar": "es",
    "co": "es",
    "cl": "es",
    "pe": "es",
    "ee": "et",
    "fi": "fi",
    "fr": "fr",
    "be": "fr",
    "mc": "fr",
    "hu": "hu",
    "id": "id",
    "it": "it",
    "sm": "it",
    "va": "it",
    "jp": "ja",
    "kr": "ko",
    "lt": "lt",
    "lv": "lv",
    "no": "nb",
    "nl": "nl",
    "sr": "nl",
    "pl": "pl",
    "pt": "pt-pt",
    "br": "pt-br",
    "ao": "pt-pt",
    "mz": "pt-pt",
    "ro": "ro",
    "md": "ro",
    "ru": "ru",
    "sk": "sk",
    "si": "sl",
    "se": "sv",
    "tr": "tr",
    "ua": "uk",
}


def lookup_language(
    reaction: str,
    table: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """Resolve a reaction name to a DeepL target language code.

    Args:
        reaction: Slack reaction name without colons (e.g. "flag-jp", "fr").
        table: Optional mapping to use instead of REACTION_TO_LANG.

    Returns:
        The language code, or None when the reaction has no mapping.
    """
    mapping = REACTION_TO_LANG if table is None else table
    if reaction.startswith(FLAG_PREFIX):
        return mapping.get(reaction[len(FLAG_PREFIX):])
    return mapping.get(reaction)
