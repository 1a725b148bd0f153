"""
Character class helpers used by the merge rules.
"""

import re


# Full-width katakana plus the long-vowel marks that appear inside katakana words
KATAKANA_RE = re.compile(r"[ァ-ヶー－]+")

# Laugh filler such as "w" or "wwww" (at most five letters)
LAUGH_FILLER_RE = re.compile(r"w{1,5}")

# Explanatory mood endings: んだ, んだな, えだ ...
EXPLANATORY_RE = re.compile(r"[んえ]だ")


def is_katakana(text: str) -> bool:
    """True if ``text`` is non-empty and made only of katakana."""
    return KATAKANA_RE.fullmatch(text) is not None


def is_laugh_filler(text: str) -> bool:
    return LAUGH_FILLER_RE.fullmatch(text) is not None


def starts_explanatory(text: str) -> bool:
    return EXPLANATORY_RE.match(text) is not None
