"""
Action synonyms
Rewrites non-canonical verbs (tap, pick, ensure, ...) to the verbs the grammar
tables are written against. Used as a second pass when a sentence did not match.
"""
import re
from typing import Dict, List, Tuple

ACTION_SYNONYMS: Dict[str, str] = {
    # click
    'tap': 'click',
    'press': 'click',
    'hit': 'click',
    'push': 'click',
    # type
    'enter': 'type',
    'input': 'type',
    'write': 'type',
    'put': 'type',
    # select
    'pick': 'select',
    'choose': 'select',
    # verify
    'ensure': 'verify',
    'confirm': 'verify',
    'assert': 'verify',
    'validate': 'verify',
    'expect': 'verify',
    'should': 'verify',
    'must': 'verify',
    # checkboxes
    'mark': 'check',
    'tick': 'check',
    'untick': 'uncheck',
    'unmark': 'uncheck',
    'deselect': 'uncheck',
    # queries
    'read': 'get',
    'extract': 'get',
    'fetch': 'get',
    'retrieve': 'get',
    'capture': 'get',
    'grab': 'get',
    # navigation
    'go': 'navigate',
    'open': 'navigate',
    'visit': 'navigate',
    'browse': 'navigate',
    # pointer
    'mouse over': 'hover',
    'mouseover': 'hover',
    'double click': 'double-click',
    'doubleclick': 'double-click',
    'dbl click': 'double-click',
    'dblclick': 'double-click',
    'right click': 'right-click',
    'rightclick': 'right-click',
    'context click': 'right-click',
    # clearing and waiting
    'empty': 'clear',
    'erase': 'clear',
    'remove': 'clear',
    'pause': 'wait',
    # scrolling and focus
    'scroll down': 'scroll',
    'scroll up': 'scroll',
    'focus on': 'focus',
    'set focus': 'focus',
}


def _compile(synonyms: Dict[str, str]) -> List[Tuple[re.Pattern, str]]:
    # longest first, multi-word synonyms before their parts
    ordered = sorted(synonyms, key=len, reverse=True)
    return [(re.compile(rf'\b{re.escape(word)}\b', re.IGNORECASE), synonyms[word]) for word in ordered]


_COMPILED = _compile(ACTION_SYNONYMS)


def normalize_synonyms(text: str) -> str:
    """Replace action synonyms with their canonical verb.

    Matching is whole-word and case-insensitive. Placeholder tokens such as
    __QUOTED_0__ are single words to the regex engine and are never touched.
    """
    normalized = text
    for pattern, canonical in _COMPILED:
        normalized = pattern.sub(canonical, normalized)
    return normalized
