"""
Morphological analyzer access for bunkatsu.

The merge rules are written against IPADIC categories, so the default
analyzer is MeCab (via fugashi) running over the ``ipadic`` dictionary.

The analyzer is expensive to build, so it is created lazily, once per
process, through an AnalyzerHandle. The first call fixes the configuration;
a later call that asks for a different configuration is an error rather
than being silently ignored.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional

from bunkatsu.types import RawMorpheme, SYMBOL_POS

logger = logging.getLogger(__name__)


# IPADIC feature layout:
#   pos, pos_detail_1, pos_detail_2, pos_detail_3,
#   conj_type, conj_form, base_form, reading, pronunciation
# Unknown words only carry the first 7 fields.
FEATURE_POS = 0
FEATURE_POS_DETAIL_1 = 1
FEATURE_BASE_FORM = 6
FEATURE_READING = 7

# Category used for whitespace MeCab skips over (same as kuromoji)
WHITESPACE_DETAIL = "空白"


class ConfigurationConflictError(RuntimeError):
    """Raised when the analyzer is requested again with different options."""
    pass


def _feature_field(feature, index: int) -> str:
    if index >= len(feature):
        return ""
    value = feature[index]
    if value is None or value == "*":
        return ""
    return value


def _whitespace_morpheme(text: str) -> RawMorpheme:
    return RawMorpheme(
        surface=text,
        pos=SYMBOL_POS,
        pos_detail_1=WHITESPACE_DETAIL,
        reading="",
        base_form=text,
    )


# =============================================================================
# MeCab / IPADIC Analyzer
# =============================================================================

class MecabAnalyzer:
    """
    MeCab tagger over IPADIC, returning RawMorpheme lists.

    Whitespace that MeCab drops is re-inserted as 記号/空白 morphemes so the
    surfaces always concatenate back to the input.
    """

    def __init__(
        self,
        args: str = "",
        dicdir: Optional[str] = None,
        userdic: Optional[str] = None,
    ):
        try:
            import fugashi
            import ipadic
        except ImportError as e:
            logger.error(f"Failed to import MeCab bindings: {e}")
            logger.error("Install with: pip install fugashi ipadic")
            raise

        if dicdir is not None:
            tagger_args = f'-d "{dicdir}"'
        else:
            tagger_args = ipadic.MECAB_ARGS
        if userdic is not None:
            tagger_args += f' -u "{userdic}"'
        if args:
            tagger_args += " " + args

        try:
            self._tagger = fugashi.GenericTagger(tagger_args)
        except Exception as e:
            logger.error(f"Failed to initialize MeCab tagger: {e}")
            raise

    def tokenize(self, text: str) -> List[RawMorpheme]:
        """
        Analyze ``text`` into raw morphemes.

        Args:
            text: Japanese text (may be empty)

        Returns:
            List of RawMorpheme whose surfaces concatenate to ``text``
        """
        if not text:
            return []

        morphemes = []
        consumed = 0

        for node in self._tagger(text):
            if node.white_space:
                morphemes.append(_whitespace_morpheme(node.white_space))
                consumed += len(node.white_space)

            feature = node.feature
            morphemes.append(RawMorpheme(
                surface=node.surface,
                pos=_feature_field(feature, FEATURE_POS),
                pos_detail_1=_feature_field(feature, FEATURE_POS_DETAIL_1),
                reading=_feature_field(feature, FEATURE_READING),
                base_form=_feature_field(feature, FEATURE_BASE_FORM) or node.surface,
            ))
            consumed += len(node.surface)

        # MeCab reports no node for trailing whitespace
        rest = text[consumed:]
        if rest and not rest.strip():
            morphemes.append(_whitespace_morpheme(rest))

        return morphemes


# =============================================================================
# Init-once Guard
# =============================================================================

class AnalyzerHandle:
    """
    Lazily builds one analyzer and pins the options it was built with.

    Args:
        factory: Callable invoked as ``factory(**options)`` on first use
    """

    def __init__(self, factory: Callable[..., Any]):
        self._factory = factory
        self._lock = threading.Lock()
        self._analyzer: Optional[Any] = None
        self._options: Optional[Dict[str, Any]] = None

    def get(self, options: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Return the shared analyzer, building it on the first call.

        Args:
            options: Keyword arguments for the factory. Only honored on the
                first call; later calls must omit them or pass equal ones.

        Returns:
            The analyzer instance

        Raises:
            ConfigurationConflictError: If ``options`` differ from the ones
                the analyzer was built with
        """
        requested = dict(options) if options is not None else None

        with self._lock:
            if self._analyzer is None:
                # Factory errors propagate; the handle stays uninitialized
                self._analyzer = self._factory(**(requested or {}))
                self._options = requested
                logger.info(f"Analyzer initialized with options {requested!r}")
                return self._analyzer

            if requested is not None and requested != self._options:
                raise ConfigurationConflictError(
                    "bunkatsu: analyzer already initialized with "
                    f"{self._options!r}; subsequent calls must omit tagger "
                    "options or pass the exact same ones."
                )

            return self._analyzer

    def is_initialized(self) -> bool:
        return self._analyzer is not None

    @property
    def options(self) -> Optional[Dict[str, Any]]:
        """Options the analyzer was built with (None if built without)."""
        return self._options

    def reset(self) -> None:
        """Drop the cached analyzer so the next call builds a fresh one."""
        with self._lock:
            self._analyzer = None
            self._options = None


# Module-level singleton
_DEFAULT_HANDLE = AnalyzerHandle(MecabAnalyzer)


def get_default_handle() -> AnalyzerHandle:
    """Get the process-wide analyzer handle used by the public API."""
    return _DEFAULT_HANDLE


def get_analyzer(options: Optional[Mapping[str, Any]] = None) -> Any:
    """Shortcut for ``get_default_handle().get(options)``."""
    return _DEFAULT_HANDLE.get(options)
