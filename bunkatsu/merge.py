"""
Merge engine for bunkatsu.

``should_merge_forward`` evaluates the rule table for a single pair and
``merge_tokens`` runs the streaming reduction over a whole sentence.
Both are pure: no logging, no I/O, no state kept between calls.
"""

from typing import Any, Iterable, List, Optional, Tuple

from bunkatsu.rules import MERGE_RULES, Rule
from bunkatsu.types import Morpheme, Segment


def find_matching_rule(
    prev: Any,
    curr: Any,
    rules: Tuple[Rule, ...] = MERGE_RULES,
) -> Optional[Rule]:
    """
    Return the first rule whose predicate matches (prev, curr).

    Returns:
        The deciding Rule, or None if no rule matches
    """
    for rule in rules:
        if rule.matches(prev, curr):
            return rule
    return None


def should_merge_forward(
    prev: Any,
    curr: Any,
    rules: Tuple[Rule, ...] = MERGE_RULES,
) -> bool:
    """
    Decide whether ``curr`` should be absorbed into ``prev``.

    Args:
        prev: The open segment (or any object with surface/pos/pos_detail_1)
        curr: The next morpheme
        rules: Ordered rule table; first match wins

    Returns:
        The verdict of the first matching rule, False if none matches
    """
    rule = find_matching_rule(prev, curr, rules)
    if rule is None:
        return False
    return rule.verdict


def merge_tokens(
    morphemes: Iterable[Morpheme],
    rules: Tuple[Rule, ...] = MERGE_RULES,
) -> List[Segment]:
    """
    Fold annotated morphemes into learner-sized segments.

    Single left-to-right pass: each morpheme either extends the last
    segment or opens a new one. A closed segment is never revisited, so a
    rule only ever sees the immediately preceding segment.

    Args:
        morphemes: Offset-annotated morphemes in source order
        rules: Rule table forwarded to should_merge_forward

    Returns:
        List of Segment objects covering the same text
    """
    merged: List[Segment] = []

    for morpheme in morphemes:
        if merged and should_merge_forward(merged[-1], morpheme, rules):
            merged[-1].absorb(morpheme)
            continue
        merged.append(Segment.from_morpheme(morpheme))

    return merged
