"""
Quoted literal extraction
Replaces every quoted substring of a step with a __QUOTED_<n>__ placeholder so
grammar patterns can be written against sentence structure only
"""
import re
from dataclasses import dataclass, field
from typing import List, Sequence

QUOTE_CHARS = ('"', "'")
PLACEHOLDER_TEMPLATE = '__QUOTED_{}__'
PLACEHOLDER_PATTERN = re.compile(r'__QUOTED_(\d+)__')


@dataclass(frozen=True)
class Literal:
    """A quoted substring with its extraction order and quote style"""
    index: int
    text: str
    quote: str = "'"

    @property
    def placeholder(self) -> str:
        return PLACEHOLDER_TEMPLATE.format(self.index)


@dataclass(frozen=True)
class QuotedText:
    normalized: str
    literals: List[Literal] = field(default_factory=list)

    @property
    def values(self) -> List[str]:
        return [literal.text for literal in self.literals]


def _opens_literal(text: str, position: int) -> bool:
    # a quote glued to a preceding letter or digit is an apostrophe: doesn't, user's
    if position == 0:
        return True
    return not text[position - 1].isalnum()


def extract_quoted(text: str) -> QuotedText:
    """Extract quoted literals left to right.

    A literal runs from an opening quote to the next quote of the same style.
    There is no escaping. When an opening quote is never closed the rest of
    the line, starting at the orphan quote, is kept as plain text.
    """
    literals: List[Literal] = []
    parts: List[str] = []
    position = 0
    length = len(text)

    while position < length:
        char = text[position]
        if char not in QUOTE_CHARS or not _opens_literal(text, position):
            parts.append(char)
            position += 1
            continue

        closing = text.find(char, position + 1)
        if closing == -1:
            parts.append(text[position:])
            break

        literal = Literal(index=len(literals), text=text[position + 1:closing], quote=char)
        literals.append(literal)
        parts.append(literal.placeholder)
        position = closing + 1

    return QuotedText(normalized=''.join(parts), literals=literals)


def restore_quoted(normalized: str, literals: Sequence[Literal]) -> str:
    """Put the quoted literals back in place of their placeholders"""
    by_index = {literal.index: literal for literal in literals}

    def _restore(match: re.Match) -> str:
        literal = by_index.get(int(match.group(1)))
        if literal is None:
            return match.group(0)
        return f"{literal.quote}{literal.text}{literal.quote}"

    return PLACEHOLDER_PATTERN.sub(_restore, normalized)


def resolve_placeholders(text: str, values: Sequence[str]) -> str:
    """Replace placeholders with bare literal content, unknown slots become empty"""

    def _resolve(match: re.Match) -> str:
        index = int(match.group(1))
        return values[index] if index < len(values) else ''

    return PLACEHOLDER_PATTERN.sub(_resolve, text)
