"""
bunkatsu: learner-friendly Japanese segmentation

MeCab (IPADIC) splits text into fine-grained morphemes; bunkatsu stitches
them back into chunks that are useful for dictionary lookup and reading
aids, e.g. the passive 「食べられる」 comes back as one chunk instead of four.
Every segment keeps its character offsets and the morphemes it absorbed.

Basic Usage:
    import bunkatsu

    for token in bunkatsu.segment_japanese("食べられちゃったんだよ！"):
        print(token.segment, token.start, token.end)
"""

import asyncio
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Mapping, Optional, Tuple

from bunkatsu.analyzer import (
    AnalyzerHandle,
    ConfigurationConflictError,
    MecabAnalyzer,
    get_default_handle,
)
from bunkatsu.annotate import AlignmentError, annotate
from bunkatsu.merge import find_matching_rule, merge_tokens, should_merge_forward
from bunkatsu.rules import DISABLED_NUMERIC_RULES, MERGE_RULES, Rule
from bunkatsu.types import Morpheme, RawMorpheme, Segment, SegmentedToken

__version__ = "0.1.0"


# =============================================================================
# Main API
# =============================================================================

def segment_japanese(
    text: str,
    full_breakdown: bool = False,
    tagger_options: Optional[Mapping[str, Any]] = None,
) -> List[SegmentedToken]:
    """
    Segment a Japanese string using the learner-friendly merge rules.

    Args:
        text: A sentence or arbitrary Japanese string (may be empty)
        full_breakdown: Skip the merge pass and return every raw morpheme
        tagger_options: Keyword arguments for the analyzer (e.g. ``dicdir``,
            ``userdic``, ``args``). Only honored on first use.

    Returns:
        List of SegmentedToken objects

    Raises:
        ConfigurationConflictError: If ``tagger_options`` differ from the
            options the analyzer was first built with

    Example:
        >>> [t.segment for t in bunkatsu.segment_japanese("食べた。")]
        ['食べた', '。']
    """
    analyzer = get_default_handle().get(tagger_options)
    morphemes = annotate(text, analyzer.tokenize(text))

    if full_breakdown:
        return [
            SegmentedToken(
                segment=m.surface,
                is_word_like=m.is_word_like,
                index=i,
                start=m.start,
                end=m.end,
                sub_token_count=1,
            )
            for i, m in enumerate(morphemes)
        ]

    return [
        SegmentedToken(
            segment=s.surface,
            is_word_like=s.is_word_like,
            index=i,
            start=s.start,
            end=s.end,
            sub_token_count=len(s.sub_tokens),
        )
        for i, s in enumerate(merge_tokens(morphemes))
    ]


def warm_up(
    tagger_options: Optional[Mapping[str, Any]] = None,
    verbose: bool = False,
) -> Tuple[float, dict]:
    """
    Build the analyzer ahead of the first segmentation call.

    Args:
        tagger_options: Forwarded to the analyzer on first use
        verbose: If True, print timing information

    Returns:
        Tuple of (total_time_seconds, timing_details_dict)
    """
    timings = {}
    total_start = time.perf_counter()

    if verbose:
        print("Loading MeCab / IPADIC...")

    t0 = time.perf_counter()
    get_default_handle().get(tagger_options)
    timings['analyzer'] = (time.perf_counter() - t0) * 1000

    if verbose:
        print(f"  Analyzer:       {timings['analyzer']:>7.1f}ms")

    total_time = time.perf_counter() - total_start
    timings['total'] = total_time * 1000

    if verbose:
        print(f"Total warm-up:    {timings['total']:>7.1f}ms")

    return total_time, timings


def get_version() -> str:
    """Get the library version."""
    return __version__


# =============================================================================
# Async API
# =============================================================================

# Thread pool for async operations
_executor = None
_executor_lock = threading.Lock()


def _get_executor() -> ThreadPoolExecutor:
    """Get or create the thread pool executor."""
    global _executor

    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="bunkatsu")

    return _executor


class AnalysisTimeoutError(Exception):
    """Raised when async segmentation times out."""
    pass


async def segment_japanese_async(
    text: str,
    full_breakdown: bool = False,
    tagger_options: Optional[Mapping[str, Any]] = None,
    timeout: float = 30.0,
) -> List[SegmentedToken]:
    """
    Segment Japanese text without blocking the event loop.

    Args:
        text: Japanese text to segment
        full_breakdown: Skip the merge pass
        tagger_options: Forwarded to the analyzer on first use
        timeout: Maximum time in seconds (default 30s)

    Returns:
        List of SegmentedToken objects

    Raises:
        AnalysisTimeoutError: If segmentation exceeds timeout
        ConfigurationConflictError: See segment_japanese
    """
    loop = asyncio.get_running_loop()
    executor = _get_executor()

    try:
        future = loop.run_in_executor(
            executor,
            lambda: segment_japanese(text, full_breakdown, tagger_options),
        )
        return await asyncio.wait_for(future, timeout=timeout)
    except asyncio.TimeoutError:
        raise AnalysisTimeoutError(f"Segmentation timed out after {timeout}s")


def shutdown() -> None:
    """
    Shutdown the thread pool executor.

    Call this when your application is shutting down to cleanly
    release resources.
    """
    global _executor

    with _executor_lock:
        executor, _executor = _executor, None

    if executor is not None:
        executor.shutdown(wait=True)


# =============================================================================
# Module-level exports
# =============================================================================

__all__ = [
    # Data classes
    "RawMorpheme",
    "Morpheme",
    "Segment",
    "SegmentedToken",
    "Rule",
    # Sync API
    "segment_japanese",
    "warm_up",
    "get_version",
    # Engine
    "annotate",
    "merge_tokens",
    "should_merge_forward",
    "find_matching_rule",
    "MERGE_RULES",
    "DISABLED_NUMERIC_RULES",
    # Analyzer
    "AnalyzerHandle",
    "MecabAnalyzer",
    # Async API
    "segment_japanese_async",
    "shutdown",
    # Exceptions
    "AlignmentError",
    "AnalysisTimeoutError",
    "ConfigurationConflictError",
    # Version
    "__version__",
]
