"""
Named regex patterns and first-match evaluation.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class PatternSpec:
    """A named regex pattern with example and notes for documentation."""
    name: str
    pattern: str
    example: str
    notes: Optional[str] = None
    flags: int = re.IGNORECASE
    compiled: re.Pattern = field(default=None, init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'compiled', re.compile(self.pattern, self.flags))


def first_match(
    specs: Iterable[PatternSpec],
    text: str,
    build: Callable[[PatternSpec, re.Match], Optional[T]],
) -> Optional[T]:
    """
    Evaluate patterns in priority order and return the first usable result.

    Every occurrence of a pattern is offered to ``build`` before moving on to
    the next pattern; ``build`` returns None to reject an occurrence.
    """
    for spec in specs:
        for match in spec.compiled.finditer(text):
            result = build(spec, match)
            if result is not None:
                return result
    return None


def strip_patterns(specs: Iterable[PatternSpec], text: str) -> str:
    """Remove every occurrence of every pattern from text."""
    for spec in specs:
        text = spec.compiled.sub(' ', text)
    return text
