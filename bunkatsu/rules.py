"""
Merge rule table for bunkatsu.

Each rule decides whether the next morpheme (``curr``) should be folded into
the segment being built (``prev``). Rules are plain records kept in an
ordered tuple; the merge engine walks the tuple and the first rule whose
predicate matches decides. Order is significant: narrow exceptions such as
sentence-ending combos must come before broad rules like "particles never
merge".

``prev`` is the open Segment, so its ``surface`` is the accumulated text
while ``pos`` is still the head morpheme's category.

Category names follow IPADIC (the dictionary used by kuromoji and MeCab).
"""

from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Tuple

import marisa_trie

from bunkatsu.characters import is_katakana, is_laugh_filler, starts_explanatory
from bunkatsu.types import SYMBOL_POS


# ============================================================================
# Part-of-speech names (IPADIC)
# ============================================================================

NOUN_POS = "名詞"
VERB_POS = "動詞"
ADJECTIVE_POS = "形容詞"
AUX_VERB_POS = "助動詞"
PARTICLE_POS = "助詞"
PREFIX_POS = "接頭詞"

# pos_detail_1 values
SUFFIX_DETAIL = "接尾"
NUMBER_DETAIL = "数"


# ============================================================================
# Word Lists
# ============================================================================

AUX_VERBS: FrozenSet[str] = frozenset([
    # passive / causative
    'れる', 'られる', 'さ', 'せる',
    # past / progressive
    'た', 'てる', 'てた',
    # negative
    'ない', 'なかった',
    # volitional / conjecture
    'よう', 'まい', 'う', 'だろ', 'だろう',
    # desiderative etc.
    'たい', 'がち', 'やすい',
])

AUX_POLITE: FrozenSet[str] = frozenset(['ます', 'ました', 'ません', 'ませんでした'])

PROGRESSIVES: FrozenSet[str] = frozenset([
    'てる', 'ている', 'ちゃう', 'ちゃった', 'じゃう', 'じゃった', 'ちゃ', 'ちゃっ',
])

# giving / receiving / directional helpers after a て-form
TE_HELPERS: FrozenSet[str] = frozenset([
    'あげる', 'くれる', 'もらう', 'いく', 'くる', 'ください', '下さい',
])

LIGHT_NOUNS: FrozenSet[str] = frozenset(['こと', 'もの', 'ところ'])

SENTENCE_ENDINGS: FrozenSet[str] = frozenset(['じゃん', 'だよ', 'だね', 'だろ', 'かよ'])

NOUN_SUFFIXES: FrozenSet[str] = frozenset([
    '中', '後', '前', '目', '毎', '式', '的', '風', '化', '感', '力', '性', '度',
])

NOMINALIZERS: FrozenSet[str] = frozenset(['さ', 'み'])

HONORIFICS: FrozenSet[str] = frozenset(['ちゃん', 'さん', '君', 'くん', '様'])

ADNOMINAL_ENDINGS: FrozenSet[str] = frozenset(['っぽい', 'みたい', 'らしい'])

# morae that continue a 促音便 stem: 思っ+とく, 行っ+ちゃう ...
GEMINATE_FOLLOWERS: FrozenSet[str] = frozenset(['と', 'こ', 'ちゃ', 'ちま', 'ちゅ'])

PREFIXES: FrozenSet[str] = frozenset(['ご', 'お', '再', '未', '超', '非', '無', '最', '新', '多'])

FIXED_IDIOMS: Tuple[str, ...] = (
    'とりあえず', 'まったくもう', 'どうしても', 'まさかの', 'いい加減', 'なんとなく',
)

# Used only by DISABLED_NUMERIC_RULES
COUNTERS: FrozenSet[str] = frozenset(['人', '枚', '本', '匹', 'つ', '個', '回', '年', '歳', '着'])
NUM_UNITS: FrozenSet[str] = frozenset(['円', '%', '点', '年', '歳', 'kg', 'km'])
KATA_UNITS: FrozenSet[str] = frozenset(['キロ', 'メートル', 'センチ', 'グラム'])

# Prefix trie over the idioms: trie.prefixes(s) lists every idiom s starts with
IDIOM_TRIE = marisa_trie.Trie(FIXED_IDIOMS)


# ============================================================================
# Rule Record
# ============================================================================

# (prev, curr) -> bool; prev is a Segment or any morpheme-shaped object
Predicate = Callable[[Any, Any], bool]


@dataclass(frozen=True, slots=True)
class Rule:
    """
    A single merge rule.

    Attributes:
        name: Stable identifier, used in tests and diagnostics
        verdict: Value returned when the predicate matches
        predicate: Condition on (prev, curr)
        description: Short human-readable example
    """
    name: str
    verdict: bool
    predicate: Predicate
    description: str = ""

    def matches(self, prev: Any, curr: Any) -> bool:
        return self.predicate(prev, curr)

    def __repr__(self) -> str:
        return f"<Rule({self.name}, verdict={self.verdict})>"


# ============================================================================
# Predicates
# ============================================================================

def polite_prefix_before_non_noun(prev, curr) -> bool:
    return prev.surface == 'お' and curr.pos != NOUN_POS


def polite_auxiliary(prev, curr) -> bool:
    return prev.pos == VERB_POS and curr.surface in AUX_POLITE


def progressive_contraction(prev, curr) -> bool:
    return prev.pos == VERB_POS and curr.surface in PROGRESSIVES


def te_form_helper(prev, curr) -> bool:
    return prev.surface.endswith('て') and curr.surface in TE_HELPERS


def light_verb_nominalizer(prev, curr) -> bool:
    return prev.pos == VERB_POS and curr.surface in LIGHT_NOUNS


def sentence_ending_combo(prev, curr) -> bool:
    return curr.surface in SENTENCE_ENDINGS and prev.pos != SYMBOL_POS


def katakana_long_vowel(prev, curr) -> bool:
    return curr.surface == 'ー' and is_katakana(prev.surface)


def laugh_filler(prev, curr) -> bool:
    return is_laugh_filler(curr.surface)


def auxiliary_after_verb(prev, curr) -> bool:
    return curr.pos == AUX_VERB_POS and prev.pos == VERB_POS


def verb_suffix(prev, curr) -> bool:
    return curr.pos_detail_1 == SUFFIX_DETAIL and prev.pos == VERB_POS


def volitional_u(prev, curr) -> bool:
    # Only after い/え stems; a bare う elsewhere is too often something else
    return (
        curr.surface == 'う'
        and prev.pos == VERB_POS
        and prev.surface[-1:] in ('い', 'え')
    )


def auxiliary_surface(prev, curr) -> bool:
    return curr.surface in AUX_VERBS and curr.surface != 'う'


def passive_ru(prev, curr) -> bool:
    return prev.surface.endswith('れ') and curr.surface == 'る'


def te_past(prev, curr) -> bool:
    return prev.surface.endswith('て') and curr.surface in ('た', 'だ')


def noun_suffix_surface(prev, curr) -> bool:
    return prev.pos == NOUN_POS and curr.surface in NOUN_SUFFIXES


def noun_suffix_category(prev, curr) -> bool:
    return curr.pos_detail_1 == SUFFIX_DETAIL and prev.pos == NOUN_POS


def adjective_nominalizer(prev, curr) -> bool:
    return prev.pos == ADJECTIVE_POS and curr.surface in NOMINALIZERS


def honorific_suffix(prev, curr) -> bool:
    return curr.pos_detail_1 == SUFFIX_DETAIL and curr.surface in HONORIFICS


def adnominal_ending(prev, curr) -> bool:
    return curr.surface in ADNOMINAL_ENDINGS and prev.pos != SYMBOL_POS


def geminate_continuation(prev, curr) -> bool:
    return prev.surface.endswith('っ') and curr.surface in GEMINATE_FOLLOWERS


def prefix_category(prev, curr) -> bool:
    return prev.pos == PREFIX_POS and curr.pos in (NOUN_POS, VERB_POS)


def prefix_surface(prev, curr) -> bool:
    return prev.surface in PREFIXES and curr.pos in (NOUN_POS, VERB_POS)


def katakana_noun_suru(prev, curr) -> bool:
    if not (prev.pos == NOUN_POS and is_katakana(prev.surface)):
        return False
    # Conjugated する (し, さ, せ ...) still carries する as its dictionary form
    return curr.pos == VERB_POS and (curr.base_form or curr.surface) == 'する'


def fixed_idiom(prev, curr) -> bool:
    return bool(IDIOM_TRIE.prefixes(prev.surface + curr.surface))


def explanatory_nda(prev, curr) -> bool:
    return (
        starts_explanatory(curr.surface)
        and prev.pos in (ADJECTIVE_POS, VERB_POS, NOUN_POS)
    )


def particle_never_merges(prev, curr) -> bool:
    return curr.pos == PARTICLE_POS


def _is_numeric(token) -> bool:
    return token.pos == NOUN_POS and token.pos_detail_1 == NUMBER_DETAIL


def numeric_unit(prev, curr) -> bool:
    return _is_numeric(prev) and (curr.surface in NUM_UNITS or curr.surface in KATA_UNITS)


def numeric_counter(prev, curr) -> bool:
    return _is_numeric(prev) and curr.surface in COUNTERS


# ============================================================================
# Rule Tables
# ============================================================================

MERGE_RULES: Tuple[Rule, ...] = (
    # --- colloquial glue and explicit exceptions ---
    Rule('polite_prefix_before_non_noun', False, polite_prefix_before_non_noun,
         'お stays alone unless a noun follows'),
    Rule('polite_auxiliary', True, polite_auxiliary, '食べ + ます'),
    Rule('progressive_contraction', True, progressive_contraction, '見 + てる, 見 + ちゃう'),
    Rule('te_form_helper', True, te_form_helper, '見て + あげる'),
    Rule('light_verb_nominalizer', True, light_verb_nominalizer, '食べる + こと'),
    Rule('sentence_ending_combo', True, sentence_ending_combo, '最高 + じゃん'),
    Rule('katakana_long_vowel', True, katakana_long_vowel, 'カワイ + ー'),
    Rule('laugh_filler', True, laugh_filler, 'w / www'),
    # --- core morphology ---
    Rule('auxiliary_after_verb', True, auxiliary_after_verb, '食べ + た'),
    Rule('verb_suffix', True, verb_suffix, '食べ + られ'),
    Rule('volitional_u', True, volitional_u, '言い + う'),
    Rule('auxiliary_surface', True, auxiliary_surface, '... + ない'),
    Rule('passive_ru', True, passive_ru, '食べられ + る'),
    Rule('te_past', True, te_past, '...て + た'),
    # --- nouns, adjectives and fixed expressions ---
    Rule('noun_suffix_surface', True, noun_suffix_surface, '会議 + 中'),
    Rule('noun_suffix_category', True, noun_suffix_category, '日本 + 人'),
    Rule('adjective_nominalizer', True, adjective_nominalizer, '高 + さ'),
    Rule('honorific_suffix', True, honorific_suffix, '太郎 + くん'),
    Rule('adnominal_ending', True, adnominal_ending, '子供 + っぽい'),
    Rule('geminate_continuation', True, geminate_continuation, '思っ + と'),
    Rule('prefix_category', True, prefix_category, '再 + 開'),
    Rule('prefix_surface', True, prefix_surface, 'ご + 飯'),
    Rule('katakana_noun_suru', True, katakana_noun_suru, 'ガード + する'),
    Rule('fixed_idiom', True, fixed_idiom, 'まさか + の'),
    Rule('explanatory_nda', True, explanatory_nda, '行く + んだ'),
    # --- explicit refusals ---
    Rule('particle_never_merges', False, particle_never_merges, 'particles stay separate'),
)

# Numeric + unit / counter merging. Deliberately not part of MERGE_RULES;
# opt in with ``MERGE_RULES + DISABLED_NUMERIC_RULES``.
DISABLED_NUMERIC_RULES: Tuple[Rule, ...] = (
    Rule('numeric_unit', True, numeric_unit, '100 + 円'),
    Rule('numeric_counter', True, numeric_counter, '三 + 匹'),
)


def get_rule(name: str, rules: Tuple[Rule, ...] = MERGE_RULES + DISABLED_NUMERIC_RULES) -> Rule:
    """
    Look up a rule by name.

    Raises:
        KeyError: If no rule has that name
    """
    for rule in rules:
        if rule.name == name:
            return rule
    raise KeyError(name)
