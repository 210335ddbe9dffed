#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/languages.py
"""Language, script and font tables for polyglossia.

Every language code seen in a document is resolved to a
:class:`LanguageDescriptor` naming the polyglossia language, the LaTeX
environment that switches to it, its writing direction and script. After
traversal, :func:`render_language_setup` turns the set of languages a
collection used into the ``languages.tex`` preamble fragment.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional

from wiki2latex.constants import DEFAULT_LANGUAGE, Direction

logger = logging.getLogger(__name__)

# use these when there's no B/I/BI for a font
FAKESTYLES = "AutoFakeBold=1.5,AutoFakeSlant=0.2"


@dataclass(frozen=True)
class FontSpec:
    """A fontspec font family.

    Parameters
    ----------
    name : str
        System font name
    options : str, default ""
        Extra fontspec options
    cjk : bool, default False
        Managed through xeCJK instead of polyglossia
    latin : bool, default True
        The font has usable Latin glyphs

    """

    name: str
    options: str = ""
    cjk: bool = False
    latin: bool = True


SCRIPT_FONTS: dict[str, FontSpec] = {
    "default": FontSpec("FreeSerif"),
    "Arabic": FontSpec("Amiri"),
    "Devanagari": FontSpec("Nakula", FAKESTYLES, latin=False),
    "Hebrew": FontSpec("Linux Libertine O"),
    "Latin": FontSpec("Linux Libertine O"),
    "Malayalam": FontSpec("Rachana", FAKESTYLES, latin=False),
}

LANGUAGE_FONTS: dict[str, FontSpec] = {
    # tweaks the accent position
    "vietnamese": FontSpec("Linux Libertine O", "Language=Vietnamese"),
    "urdu": FontSpec("Nafees", FAKESTYLES, latin=False),
    "farsi": FontSpec("Nazli", latin=False),
    "chinese": FontSpec(
        "AR PL UMing CN",
        "BoldFont=Droid Sans Fallback,ItalicFont=AR PL UKai CN,Language=Chinese Simplified,CJKShape=Simplified",
        cjk=True,
    ),
    "japanese": FontSpec("IPAexMincho", "BoldFont=Droid Sans Fallback,AutoFakeSlant=0.2", cjk=True),
    "korean": FontSpec("Baekmuk Batang", "BoldFont=Baekmuk Headline,AutoFakeSlant=0.2", cjk=True),
}

# polyglossia language -> (script, direction, environment)
_GLOSS_INFO: dict[str, tuple[str, Direction, Optional[str]]] = {
    "amharic": ("Ethiopic", "ltr", None),
    "arabic": ("Arabic", "rtl", "Arabic"),
    "armenian": ("Armenian", "ltr", None),
    "bengali": ("Bengali", "ltr", None),
    "bulgarian": ("Cyrillic", "ltr", None),
    "hans": ("CJK", "ltr", None),
    "hant": ("CJK", "ltr", None),
    "hanp": ("Latin", "ltr", None),
    "coptic": ("Coptic", "ltr", None),
    "divehi": ("Thaana", "rtl", None),
    "farsi": ("Arabic", "rtl", None),
    "greek": ("Greek", "ltr", None),
    "gujarati": ("Gujarati", "ltr", None),
    "hebrew": ("Hebrew", "rtl", None),
    "hindi": ("Devanagari", "ltr", None),
    "japanese": ("Kana", "ltr", None),
    "kannada": ("Kannada", "ltr", None),
    "korean": ("Hangul", "ltr", None),
    "lao": ("Lao", "ltr", None),
    "malayalam": ("Malayalam", "ltr", None),
    "marathi": ("Devanagari", "ltr", None),
    "nko": ("N'ko", "rtl", None),
    "oriya": ("Oriya", "ltr", None),
    "punjabi": ("Gurmukhi", "ltr", None),
    "russian": ("Cyrillic", "ltr", None),
    "sanskrit": ("Devanagari", "ltr", None),
    "serbian": ("Cyrillic", "ltr", None),
    "syriac": ("Syriac", "rtl", None),
    "tamil": ("Tamil", "ltr", None),
    "telugu": ("Telugu", "ltr", None),
    "thai": ("Thai", "ltr", None),
    "tibetan": ("Tibetan", "ltr", None),
    "ukrainian": ("Cyrillic", "ltr", None),
    "urdu": ("Arabic", "rtl", None),
}

# language code -> (polyglossia language, options)
LANGUAGE_TABLE: dict[str, tuple[str, str]] = {
    "sq": ("albanian", ""),
    "am": ("amharic", ""),
    "ar": ("arabic", ""),
    "und-Arab": ("arabic", ""),
    "hy": ("armenian", ""),
    "ast": ("asturian", ""),
    "id": ("bahasai", ""),
    "ms": ("bahasam", ""),
    "eu": ("basque", ""),
    "bn": ("bengali", ""),
    "pt-BR": ("brazil", ""),
    "br": ("breton", ""),
    "bg": ("bulgarian", ""),
    "ca": ("catalan", ""),
    "cop": ("coptic", ""),
    "hr": ("croatian", ""),
    "cs": ("czech", ""),
    "da": ("danish", ""),
    "dv": ("divehi", ""),
    "nl": ("dutch", ""),
    "en": ("english", ""),
    "eo": ("esperanto", ""),
    "et": ("estonian", ""),
    "fa": ("farsi", ""),
    "fi": ("finnish", ""),
    "fr": ("french", ""),
    "fur": ("friulan", ""),
    "gl": ("galician", ""),
    "de": ("german", ""),
    "el": ("greek", ""),
    "el-latn": ("greek", "numerals=arabic"),
    "grc": ("greek", "variant=ancient"),
    "gu": ("gujarati", ""),
    "he": ("hebrew", ""),
    "hi": ("hindi", ""),
    "is": ("icelandic", ""),
    "ie": ("interlingua", ""),
    "ga": ("irish", ""),
    "it": ("italian", ""),
    "kn": ("kannada", ""),
    "lo": ("lao", ""),
    "la": ("latin", ""),
    # non-standard, seen in Arabic wiki content
    "Latn": ("latin", ""),
    "lv": ("latvian", ""),
    "lt": ("lithuanian", ""),
    "dsb": ("lsorbian", ""),
    "hu": ("magyar", ""),
    "ml": ("malayalam", ""),
    "mr": ("marathi", ""),
    "nqo": ("nko", ""),
    "no": ("norsk", ""),
    "nn": ("nynorsk", ""),
    "oc": ("occitan", ""),
    "or": ("oriya", ""),
    "pa": ("punjabi", ""),
    "pmsq": ("piedmontese", ""),
    "pl": ("polish", ""),
    "pt": ("portuges", ""),
    "ro": ("romanian", ""),
    "rm": ("romansh", ""),
    "ru": ("russian", ""),
    "sme": ("samin", ""),
    "sa": ("sanskrit", ""),
    "sa-Latn": ("sanskrit", ""),
    "gd": ("scottish", ""),
    "sr": ("serbian", ""),
    "sk": ("slovak", ""),
    "sl": ("slovenian", ""),
    "es": ("spanish", ""),
    "sv": ("swedish", ""),
    "syc": ("syriac", ""),
    "ta": ("tamil", ""),
    "te": ("telugu", ""),
    "th": ("thai", ""),
    "bo": ("tibetan", ""),
    "tr": ("turkish", ""),
    "tk": ("turkmen", ""),
    "uk": ("ukrainian", ""),
    "ur": ("urdu", ""),
    "hsb": ("usorbian", ""),
    "vi": ("vietnamese", ""),
    "cy": ("welsh", ""),
    "ja": ("japanese", ""),
    "zh-Hans": ("hans", ""),
    "zh-Hant": ("hant", ""),
    "zh-Latn-pinyin": ("hanp", ""),
    "ko": ("korean", ""),
}


@dataclass(frozen=True)
class LanguageDescriptor:
    """Static typesetting metadata for one language.

    Parameters
    ----------
    code : str
        Language code the descriptor was resolved from
    lang : str
        Polyglossia language name, used for ``\\text<lang>``
    env : str
        Environment that switches a block to this language
    dir : {"ltr", "rtl"}
        Writing direction
    script : str
        Script name, used to pick fonts
    options : str
        Polyglossia language options
    latin_coverage : bool
        The language's font can set Latin text itself

    """

    code: str
    lang: str
    env: str
    dir: Direction
    script: str
    options: str = ""
    latin_coverage: bool = True

    @property
    def font(self) -> Optional[FontSpec]:
        """Language font if one is configured, else the script font."""
        return LANGUAGE_FONTS.get(self.lang) or SCRIPT_FONTS.get(self.script)


_WARNED: set[str] = set()


def lookup(code: str) -> LanguageDescriptor:
    """Resolve a language code to its descriptor.

    Unknown codes are logged once, then retried with their region or
    variant subtag stripped, and finally fall back to English.

    Parameters
    ----------
    code : str
        RFC 1766 language code, e.g. ``"he"`` or ``"sr-Latn"``

    Returns
    -------
    LanguageDescriptor
        Descriptor for the code or its fallback

    """
    if code not in LANGUAGE_TABLE:
        if code not in _WARNED:
            logger.warning("Language support not found for %s", code)
            _WARNED.add(code)
        stripped = code.split("-", 1)[0]
        code = stripped if stripped in LANGUAGE_TABLE else DEFAULT_LANGUAGE
    return _descriptor(code)


@lru_cache(maxsize=None)
def _descriptor(code: str) -> LanguageDescriptor:
    lang, options = LANGUAGE_TABLE[code]
    script, direction, env = _GLOSS_INFO.get(lang, ("Latin", "ltr", None))
    font = LANGUAGE_FONTS.get(lang) or SCRIPT_FONTS.get(script)
    return LanguageDescriptor(
        code=code,
        lang=lang,
        env=env or lang,
        dir=direction,
        script=script,
        options=options,
        latin_coverage=font.latin if font else True,
    )


def ltr_font_command(descriptor: LanguageDescriptor) -> Optional[str]:
    r"""Return the ``\LTRfont`` redefinition for a right-to-left language.

    Embedded left-to-right text in a right-to-left script should not pick up
    the script's shaping features, so ``\LTRfont`` selects a plain variant of
    the script font. Returns None when no redefinition is needed.
    """
    if descriptor.dir == "rtl" and descriptor.script in SCRIPT_FONTS:
        return f"\\renewcommand{{\\LTRfont}}{{\\LTR{descriptor.script.lower()}font}}"
    return None


def render_language_setup(used_languages: Iterable[str], collection_language: str) -> str:
    r"""Render the polyglossia and font preamble for a collection.

    Parameters
    ----------
    used_languages : iterable of str
        Every language code seen while translating the collection
    collection_language : str
        The collection's default language code

    Returns
    -------
    str
        Contents of ``languages.tex``

    Examples
    --------
        >>> print(render_language_setup(["en"], "en"))  # doctest: +ELLIPSIS
        \setdefaultlanguage[]{english}
        \usepackage{bidi}
        ...

    """
    used = list(dict.fromkeys([collection_language, *used_languages]))
    default = lookup(collection_language)
    lines = [f"\\setdefaultlanguage[{default.options}]{{{default.lang}}}"]

    others = list(dict.fromkeys(lookup(code).lang for code in used if code != collection_language))
    if others:
        lines.append(f"\\setotherlanguages{{{','.join(others)}}}")
    # always load bidi: even a left-to-right collection may hold rtl snippets
    lines.append("\\usepackage{bidi}")

    scripts: dict[str, None] = {}
    rtl_scripts: set[str] = set()
    declared: set[str] = set()
    for code in used:
        descriptor = lookup(code)
        scripts[descriptor.script] = None
        if descriptor.dir == "rtl":
            rtl_scripts.add(descriptor.script)
        if not descriptor.latin_coverage:
            scripts["Latin"] = None
        font = LANGUAGE_FONTS.get(descriptor.lang)
        if font is None or descriptor.lang in declared:
            continue
        declared.add(descriptor.lang)
        options = f",{font.options}" if font.options else ""
        if font.cjk:
            lines.append(f"\\setCJKfamilyfont{{{descriptor.lang}}}[Script={descriptor.script}{options}]{{{font.name}}}")
            lines.append(f"\\newcommand{{\\{descriptor.lang}font}}{{\\CJKfamily{{{descriptor.lang}}}}}")
        else:
            lines.append(f"\\newfontfamily\\{descriptor.lang}font[Script={descriptor.script}{options}]{{{font.name}}}")

    for script in scripts:
        font = SCRIPT_FONTS.get(script)
        if font is None:
            continue
        options = f",{font.options}" if font.options else ""
        lines.append(f"\\newfontfamily\\{script.lower()}font[Script={script}{options}]{{{font.name}}}")
        if script in rtl_scripts:
            # plain variant without script features, for embedded ltr text
            lines.append(f"\\newfontfamily\\LTR{script.lower()}font{{{font.name}}}")

    ltr_font = ltr_font_command(default)
    if ltr_font:
        lines.append(ltr_font)
    return "\n".join(lines) + "\n"
