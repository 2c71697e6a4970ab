"""
Named preprocessors for value unification.

Callers that let end users pick a transform choose one of these by name
instead of supplying code. Each takes and returns a raw value and runs
before normalization.
"""

import re
from typing import Callable

from unidecode import unidecode

from .config import UnifyConfigError

Preprocessor = Callable[[str], str]


# Company legal forms, stripped from the end of a value
LEGAL_SUFFIXES = [
    # Spanish / Latin American forms
    'SOCIEDAD ANONIMA DE CAPITAL VARIABLE',
    'SOCIEDAD DE RESPONSABILIDAD LIMITADA',
    'S.A.P.I. DE C.V.',
    'S.A.B. DE C.V.',
    'S. DE R.L. DE C.V.',
    'S. DE R.L.',
    'S.A. DE C.V.',
    'S.A DE C.V.',
    'SAPI DE CV',
    'SA DE CV',
    'S DE RL DE CV',
    'S DE RL',
    'S.A.',
    'S.C.',
    'A.C.',

    # English forms
    'INCORPORATED',
    'CORPORATION',
    'COMPANY',
    'LIMITED',
    'L.L.C.',
    'LLC',
    'LLP',
    'PLC',
    'INC.',
    'INC',
    'CORP.',
    'CORP',
    'LTD.',
    'LTD',
    'CO.',
    'CO',

    # Continental European forms
    'GMBH',
    'S.P.A.',
    'B.V.',
    'N.V.',
    'AG',
    'SA',
]

_SUFFIX_PATTERNS = [
    re.compile(r'[\s,]+' + re.escape(suffix) + r'\s*\Z', re.IGNORECASE)
    for suffix in sorted(LEGAL_SUFFIXES, key=len, reverse=True)
]


def strip_legal_suffix(value: str) -> str:
    """
    Remove one trailing legal form.

    "Coca-Cola Co." -> "Coca-Cola", "Construcciones Azteca, S.A. de C.V."
    -> "Construcciones Azteca". A value that is only a legal form is kept.
    """
    for pattern in _SUFFIX_PATTERNS:
        match = pattern.search(value)
        if match:
            return value[:match.start()]
    return value


def transliterate(value: str) -> str:
    """
    ASCII transliteration via Unidecode.

    Covers what accent folding cannot: ß -> ss, ø -> o, Ł -> L, Cyrillic
    and Greek letters.
    """
    return unidecode(value)


def collapse_ampersand(value: str) -> str:
    """Spell out "&" so "Johnson & Johnson" and "Johnson and Johnson" agree."""
    return re.sub(r'\s*&\s*', ' and ', value)


PREPROCESSORS: dict[str, Preprocessor] = {
    'strip_legal_suffix': strip_legal_suffix,
    'transliterate': transliterate,
    'collapse_ampersand': collapse_ampersand,
}


def get_preprocessor(name: str) -> Preprocessor:
    """
    Look up a registered preprocessor.

    Raises:
        UnifyConfigError: for unknown names
    """
    try:
        return PREPROCESSORS[name]
    except KeyError:
        raise UnifyConfigError(
            f"Unknown preprocessor {name!r}; expected one of {', '.join(sorted(PREPROCESSORS))}",
            details={'option': 'preprocessor', 'value': name, 'valid': sorted(PREPROCESSORS)},
        ) from None


def chain_preprocessors(*names: str) -> Preprocessor | None:
    """
    Compose registered preprocessors, applied left to right.

    Returns:
        Combined callable, or None when no names are given
    """
    steps = [get_preprocessor(name) for name in names]
    if not steps:
        return None
    if len(steps) == 1:
        return steps[0]

    def chained(value: str) -> str:
        for step in steps:
            value = step(value)
        return value

    return chained
