"""
CONCORD Normalizer: Comparison Key Normalization

Maps a raw value to the key used for grouping and distance computation:
- Optional caller-supplied preprocessor
- Diacritic folding (NFKD, combining marks U+0300-U+036F removed)
- Optional lowercasing
- Edge character stripping
- Internal character removal
- Whitespace collapsing

A value that normalizes to the empty string is treated as "empty" by the
unifier and never takes part in clustering.
"""

import re
import unicodedata
from typing import Callable, Optional

from .config import UnifyConfig, UnifyConfigError

EMPTY_KEY = ""

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_WHITESPACE = re.compile(r"\s+")


def _edge_pattern(chars: str) -> Optional[re.Pattern]:
    if not chars:
        return None
    char_class = f"[{re.escape(chars)}]+"
    return re.compile(rf"^{char_class}|{char_class}\Z")


def _internal_pattern(chars: str) -> Optional[re.Pattern]:
    if not chars:
        return None
    return re.compile(f"[{re.escape(chars)}]")


def fold_diacritics(text: str) -> str:
    """
    Decompose and drop combining accents.

    "Café Crème" -> "Cafe Creme". Characters without a decomposition
    (ß, ø, ł) are left as they are.
    """
    return _COMBINING_MARKS.sub("", unicodedata.normalize("NFKD", text))


class ValueNormalizer:
    """
    Normalizer bound to one unification config.

    Example:
        >>> normalizer = ValueNormalizer(UnifyConfig())
        >>> normalizer.normalize("  (Coca-Cola Co.) ")
        'cocacola co'
    """

    def __init__(self, config: UnifyConfig):
        self.lowercase = config.lowercase
        self.preprocessor: Optional[Callable[[str], str]] = config.preprocessor
        self._edge = _edge_pattern(config.strip_chars)
        self._internal = _internal_pattern(config.remove_internal_chars)

    def normalize(self, value: str) -> str:
        """
        Normalize a raw value to its comparison key.

        Raises:
            UnifyConfigError: if the preprocessor fails or returns a non-string
        """
        text = self._preprocess(value) if self.preprocessor else value

        # Step 1: Fold accents
        text = fold_diacritics(text)

        # Step 2: Case
        if self.lowercase:
            text = text.lower()

        # Step 3: Strip edge characters
        if self._edge is not None:
            text = self._edge.sub("", text)

        # Step 4: Remove internal characters
        if self._internal is not None:
            text = self._internal.sub("", text)

        # Step 5: Normalize whitespace
        return _WHITESPACE.sub(" ", text).strip()

    def _preprocess(self, value: str) -> str:
        try:
            result = self.preprocessor(value)
        except Exception as exc:
            raise UnifyConfigError(
                f"Preprocessor failed on {value!r}: {exc}",
                details={"option": "preprocessor", "error_type": type(exc).__name__},
            ) from exc

        if not isinstance(result, str):
            raise UnifyConfigError(
                f"Preprocessor must return a string, got {type(result).__name__}",
                details={"option": "preprocessor"},
            )
        return result


def normalize_value(value: str, config: UnifyConfig | None = None) -> str:
    """
    Convenience function for one-off normalization.

    Args:
        value: Raw value
        config: Unification config (defaults if omitted)

    Returns:
        Normalized key, EMPTY_KEY when nothing remains
    """
    return ValueNormalizer(config or UnifyConfig()).normalize(value)
