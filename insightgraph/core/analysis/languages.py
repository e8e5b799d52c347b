"""
languages.py - Language profiles: stopwords and discourse markers

Two profiles exist. ``en`` is the default and the fallback for any tag that
does not start with ``tr``.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_LANG = "en"


@dataclass(frozen=True)
class LanguageProfile:
    code: str
    stopwords: frozenset
    discourse_markers: Tuple[str, ...]


PROFILES = {
    "en": LanguageProfile(
        code="en",
        stopwords=frozenset("""
            the a an and or but if then so to of in on for with as at by is
            are was were be been it this that these those you we they i he
            she them our your
        """.split()),
        discourse_markers=(
            "because", "therefore", "however", "but", "so that", "thus",
            "in conclusion", "for example",
        ),
    ),
    "tr": LanguageProfile(
        code="tr",
        stopwords=frozenset("""
            ve veya ama fakat çünkü için ile gibi bir bu şu o de da mi mı mu
            mü ki daha çok az en olan olarak ise ya hem ben sen biz siz onlar
        """.split()),
        discourse_markers=(
            "çünkü", "bu yüzden", "dolayısıyla", "ancak", "fakat", "öyleyse",
            "sonuç", "netice", "örneğin",
        ),
    ),
}


def normalize_lang(lang: Optional[str]) -> str:
    """Map any language tag onto a supported profile code."""
    tag = (lang or DEFAULT_LANG).lower()
    if tag.startswith("tr"):
        return "tr"
    return DEFAULT_LANG


def get_profile(lang: Optional[str]) -> LanguageProfile:
    return PROFILES[normalize_lang(lang)]
