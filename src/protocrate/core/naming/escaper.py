from __future__ import annotations

"""
Reserved Identifier Escaping.

Maps package segments and unit names onto identifiers that cannot clash
with Rust keywords. Most keywords accept the raw identifier syntax (r#);
path keywords such as 'self' or 'crate' reject it and get a trailing
underscore instead.
"""

from enum import Enum
from typing import Dict, Iterable

RAW_IDENTIFIER_MARKER = "r#"
ESCAPE_SUFFIX = "_"


class EscapeStrategy(Enum):
    RAW_PREFIX = "raw_prefix"
    UNDERSCORE_SUFFIX = "underscore_suffix"


_RAW_PREFIX_WORDS = (
    # Strict keywords
    "as", "break", "const", "continue", "else", "enum", "false", "fn", "for",
    "if", "impl", "in", "let", "loop", "match", "mod", "move", "mut", "pub",
    "ref", "return", "static", "struct", "trait", "true", "type", "unsafe",
    "use", "where", "while", "dyn",
    # Reserved for future use
    "abstract", "become", "box", "do", "final", "macro", "override", "priv",
    "typeof", "unsized", "virtual", "yield",
    # 2018 edition
    "async", "await", "try",
)

_UNDERSCORE_SUFFIX_WORDS = ("self", "Self", "super", "extern", "crate")


def _table(words: Iterable[str], strategy: EscapeStrategy) -> Dict[str, EscapeStrategy]:
    return {w: strategy for w in words}


RESERVED_WORDS: Dict[str, EscapeStrategy] = {
    **_table(_RAW_PREFIX_WORDS, EscapeStrategy.RAW_PREFIX),
    **_table(_UNDERSCORE_SUFFIX_WORDS, EscapeStrategy.UNDERSCORE_SUFFIX),
}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def escape_identifier(raw: str) -> str:
    """
    Return an identifier for `raw` that is legal in a module path.

    Never fails: names outside the reserved table come back trimmed but
    otherwise untouched.

    Args:
        raw: Candidate namespace segment or unit name.

    Returns:
        str: Escaped identifier.
    """
    name = raw.strip()
    strategy = RESERVED_WORDS.get(name)

    if strategy is EscapeStrategy.RAW_PREFIX:
        return RAW_IDENTIFIER_MARKER + name
    if strategy is EscapeStrategy.UNDERSCORE_SUFFIX:
        return name + ESCAPE_SUFFIX
    return name
