"""
Data structures shared by the annotator, the merge engine and the public API.

RawMorpheme is what an analyzer hands us, Morpheme is the same unit with
absolute offsets attached, and Segment is the accumulator the merge pass
folds morphemes into.
"""

from dataclasses import dataclass, field
from typing import List, NamedTuple


# Grammatical category that marks punctuation / symbols (IPADIC level 1)
SYMBOL_POS = "記号"


class RawMorpheme(NamedTuple):
    """
    One morpheme as reported by the external analyzer.

    Only ``surface`` and ``pos`` are required; the rest default to empty so
    hand-built sequences stay short.
    """
    surface: str
    pos: str
    pos_detail_1: str = ""
    reading: str = ""
    base_form: str = ""


@dataclass(frozen=True, slots=True)
class Morpheme:
    """
    An analyzer morpheme annotated with its position in the source text.

    Attributes:
        surface: The literal substring
        pos: Coarse part of speech (e.g. "名詞", "動詞", "記号")
        pos_detail_1: Fine-grained sub-category (e.g. "接尾", "自立")
        reading: Katakana reading, "" when the analyzer has none
        base_form: Dictionary form, "" when unknown
        start: Start offset in the original text
        end: End offset (exclusive)
        is_word_like: False only for symbols / punctuation
    """
    surface: str
    pos: str
    pos_detail_1: str
    reading: str
    base_form: str
    start: int
    end: int
    is_word_like: bool

    def __repr__(self) -> str:
        return f"Morpheme({self.surface!r}, pos={self.pos!r}, {self.start}:{self.end})"


@dataclass(slots=True)
class Segment:
    """
    A run of consecutive morphemes merged into one learner-sized chunk.

    The head morpheme defines ``pos``, ``pos_detail_1``, ``base_form`` and
    ``is_word_like``; absorbing later morphemes only grows ``surface``,
    ``reading``, ``end`` and ``sub_tokens``.
    """
    surface: str
    pos: str
    pos_detail_1: str
    reading: str
    base_form: str
    start: int
    end: int
    is_word_like: bool
    sub_tokens: List[Morpheme] = field(default_factory=list)

    @classmethod
    def from_morpheme(cls, morpheme: Morpheme) -> "Segment":
        """Open a new segment headed by ``morpheme``."""
        return cls(
            surface=morpheme.surface,
            pos=morpheme.pos,
            pos_detail_1=morpheme.pos_detail_1,
            reading=morpheme.reading,
            base_form=morpheme.base_form,
            start=morpheme.start,
            end=morpheme.end,
            is_word_like=morpheme.is_word_like,
            sub_tokens=[morpheme],
        )

    def absorb(self, morpheme: Morpheme) -> None:
        """Fold ``morpheme`` onto the end of this segment."""
        self.surface += morpheme.surface
        self.reading += morpheme.reading
        self.end = morpheme.end
        self.sub_tokens.append(morpheme)

    def __repr__(self) -> str:
        parts = "+".join(m.surface for m in self.sub_tokens)
        return f"Segment({self.surface!r}, {parts}, {self.start}:{self.end})"


@dataclass(frozen=True, slots=True)
class SegmentedToken:
    """
    Public result row returned by ``bunkatsu.segment_japanese``.

    Attributes:
        segment: Surface form after the merge pass
        is_word_like: Roughly "pos != 記号" of the head morpheme
        index: Position within the returned list
        start: Start offset in the original string
        end: End offset (exclusive)
        sub_token_count: Number of analyzer morphemes merged into this token
    """
    segment: str
    is_word_like: bool
    index: int
    start: int
    end: int
    sub_token_count: int
