"""
Offset annotation for analyzer output.

Attaches absolute ``start``/``end`` offsets and the ``is_word_like`` flag to
each raw morpheme. The analyzer is trusted to return surfaces that
concatenate back to the input; a mismatch is only reported (or raised in
strict mode), never repaired.
"""

import logging
from typing import Iterable, List

from bunkatsu.types import Morpheme, RawMorpheme, SYMBOL_POS

logger = logging.getLogger(__name__)


class AlignmentError(ValueError):
    """Raised in strict mode when morpheme surfaces don't reconstruct the text."""
    pass


def annotate(
    text: str,
    raw_morphemes: Iterable[RawMorpheme],
    strict: bool = False,
) -> List[Morpheme]:
    """
    Convert analyzer morphemes into offset-annotated Morphemes.

    Args:
        text: The exact string that was passed to the analyzer
        raw_morphemes: Analyzer output in left-to-right order
        strict: Raise AlignmentError instead of logging a warning when the
            surfaces don't concatenate to ``text``

    Returns:
        List of Morpheme objects, one per raw morpheme

    Raises:
        AlignmentError: Only when ``strict`` is True and alignment fails
    """
    morphemes = []
    cursor = 0

    for raw in raw_morphemes:
        end = cursor + len(raw.surface)
        morphemes.append(Morpheme(
            surface=raw.surface,
            pos=raw.pos,
            pos_detail_1=raw.pos_detail_1 or "",
            reading=raw.reading or "",
            base_form=raw.base_form or "",
            start=cursor,
            end=end,
            is_word_like=raw.pos != SYMBOL_POS,
        ))
        cursor = end

    joined = "".join(m.surface for m in morphemes)
    if joined != text:
        message = (
            f"morpheme surfaces do not reconstruct the input "
            f"({len(joined)} chars covered, {len(text)} expected); offsets may be wrong"
        )
        if strict:
            raise AlignmentError(message)
        logger.warning(message)

    return morphemes
