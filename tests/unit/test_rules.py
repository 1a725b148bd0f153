"""Unit tests for the ordered merge rule table."""

from __future__ import annotations

import pytest

from bunkatsu.merge import find_matching_rule, should_merge_forward
from bunkatsu.rules import (
    DISABLED_NUMERIC_RULES,
    MERGE_RULES,
    get_rule,
)
from bunkatsu.types import RawMorpheme


def _tok(surface: str, pos: str, detail: str = "", base: str = "") -> RawMorpheme:
    return RawMorpheme(surface, pos, detail, "", base or surface)


@pytest.mark.parametrize(
    ("prev", "curr", "rule_name", "verdict"),
    [
        (_tok("お", "接頭詞", "名詞接続"), _tok("食べ", "動詞", "自立"),
         "polite_prefix_before_non_noun", False),
        (_tok("食べ", "動詞", "自立"), _tok("ます", "助動詞"), "polite_auxiliary", True),
        (_tok("見", "動詞", "自立"), _tok("てる", "動詞", "非自立"), "progressive_contraction", True),
        (_tok("見て", "動詞", "自立"), _tok("くれる", "動詞", "非自立"), "te_form_helper", True),
        (_tok("食べる", "動詞", "自立"), _tok("こと", "名詞", "非自立"), "light_verb_nominalizer", True),
        (_tok("最高", "名詞", "形容動詞語幹"), _tok("じゃん", "助詞", "終助詞"), "sentence_ending_combo", True),
        (_tok("カワイ", "名詞", "一般"), _tok("ー", "記号", "一般"), "katakana_long_vowel", True),
        (_tok("草", "名詞", "一般"), _tok("www", "名詞", "一般"), "laugh_filler", True),
        (_tok("食べ", "動詞", "自立"), _tok("た", "助動詞"), "auxiliary_after_verb", True),
        (_tok("食べ", "動詞", "自立"), _tok("られ", "動詞", "接尾"), "verb_suffix", True),
        (_tok("考え", "動詞", "自立"), _tok("う", "助詞", "終助詞"), "volitional_u", True),
        (_tok("静か", "名詞", "形容動詞語幹"), _tok("ない", "形容詞", "自立"), "auxiliary_surface", True),
        (_tok("流れ", "名詞", "一般"), _tok("る", "動詞", "自立"), "passive_ru", True),
        (_tok("て", "助詞", "接続助詞"), _tok("だ", "助動詞"), "te_past", True),
        (_tok("会議", "名詞", "サ変接続"), _tok("中", "名詞", "接尾"), "noun_suffix_surface", True),
        (_tok("日本", "名詞", "固有名詞"), _tok("人", "名詞", "接尾"), "noun_suffix_category", True),
        (_tok("重", "形容詞", "自立"), _tok("み", "名詞", "接尾"), "adjective_nominalizer", True),
        (_tok("たろう", "感動詞"), _tok("くん", "名詞", "接尾"), "honorific_suffix", True),
        (_tok("子供", "名詞", "一般"), _tok("みたい", "名詞", "非自立"), "adnominal_ending", True),
        (_tok("思っ", "動詞", "自立"), _tok("と", "助詞", "接続助詞"), "geminate_continuation", True),
        (_tok("お", "接頭詞", "名詞接続"), _tok("茶", "名詞", "一般"), "prefix_category", True),
        (_tok("再", "名詞", "一般"), _tok("開", "名詞", "一般"), "prefix_surface", True),
        (_tok("ガード", "名詞", "一般"), _tok("し", "動詞", "自立", "する"), "katakana_noun_suru", True),
        (_tok("まさか", "副詞", "一般"), _tok("の", "助詞", "連体化"), "fixed_idiom", True),
        (_tok("高い", "形容詞", "自立"), _tok("んだ", "名詞", "非自立"), "explanatory_nda", True),
        (_tok("猫", "名詞", "一般"), _tok("が", "助詞", "格助詞"), "particle_never_merges", False),
    ],
)
def test_each_rule_fires_for_its_construction(prev, curr, rule_name, verdict) -> None:
    """Every rule should be the first match for its own example pair."""

    rule = find_matching_rule(prev, curr)

    assert rule is not None
    assert rule.name == rule_name
    assert should_merge_forward(prev, curr) is verdict


def test_rule_names_are_unique() -> None:
    names = [rule.name for rule in MERGE_RULES + DISABLED_NUMERIC_RULES]

    assert len(names) == len(set(names))


def test_polite_prefix_exception_precedes_prefix_rules() -> None:
    """お + verb must stay split even though お is also a known prefix."""

    prev = _tok("お", "接頭詞", "名詞接続")
    curr = _tok("待ち", "動詞", "自立")

    assert get_rule("prefix_category").matches(prev, curr)
    assert get_rule("prefix_surface").matches(prev, curr)
    assert should_merge_forward(prev, curr) is False


def test_sentence_ending_particle_merges_before_particle_refusal() -> None:
    prev = _tok("うそ", "名詞", "一般")
    curr = _tok("かよ", "助詞", "終助詞")

    assert get_rule("particle_never_merges").matches(prev, curr)
    assert find_matching_rule(prev, curr).name == "sentence_ending_combo"
    assert should_merge_forward(prev, curr) is True


def test_sentence_ending_after_symbol_does_not_merge() -> None:
    assert should_merge_forward(_tok("！", "記号", "一般"), _tok("じゃん", "助詞", "終助詞")) is False


def test_volitional_u_requires_i_or_e_stem() -> None:
    assert should_merge_forward(_tok("行こ", "動詞", "自立"), _tok("う", "助詞", "終助詞")) is False


def test_laugh_filler_is_capped_at_five_letters() -> None:
    prev = _tok("草", "名詞", "一般")

    assert should_merge_forward(prev, _tok("wwwww", "名詞", "一般")) is True
    assert find_matching_rule(prev, _tok("wwwwww", "名詞", "一般")) is None


def test_katakana_noun_only_merges_with_suru() -> None:
    prev = _tok("ガード", "名詞", "一般")

    assert should_merge_forward(prev, _tok("する", "動詞", "自立")) is True
    assert should_merge_forward(prev, _tok("走る", "動詞", "自立")) is False


def test_unmatched_pair_defaults_to_no_merge() -> None:
    prev = _tok("猫", "名詞", "一般")
    curr = _tok("犬", "名詞", "一般")

    assert find_matching_rule(prev, curr) is None
    assert should_merge_forward(prev, curr) is False


def test_numeric_rules_are_not_wired_by_default() -> None:
    """Numeric + unit/counter merging only happens when opted in explicitly."""

    enabled = {rule.name for rule in MERGE_RULES}
    assert {"numeric_unit", "numeric_counter"}.isdisjoint(enabled)

    number = _tok("100", "名詞", "数")
    unit = _tok("kg", "名詞", "一般")
    counter = _tok("人", "名詞", "一般")

    assert should_merge_forward(number, unit) is False
    assert should_merge_forward(number, counter) is False

    opted_in = MERGE_RULES + DISABLED_NUMERIC_RULES
    assert find_matching_rule(number, unit, opted_in).name == "numeric_unit"
    assert find_matching_rule(number, counter, opted_in).name == "numeric_counter"


def test_decision_is_deterministic() -> None:
    prev = _tok("食べ", "動詞", "自立")
    curr = _tok("た", "助動詞")

    verdicts = {should_merge_forward(prev, curr) for _ in range(5)}

    assert verdicts == {True}


def test_get_rule_unknown_name_raises() -> None:
    with pytest.raises(KeyError):
        get_rule("no_such_rule")
