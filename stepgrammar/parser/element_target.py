"""
Element target parsing
Splits a free-text element description into ordinal, position, relative anchor,
canonical element type and descriptor words, and scores parse confidence.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from stepgrammar.grammars.types import ExtractionResult, GrammarRule
from stepgrammar.parser.quoted_extractor import resolve_placeholders

ORDINAL_MAP: Dict[str, int] = {
    'first': 1, '1st': 1,
    'second': 2, '2nd': 2,
    'third': 3, '3rd': 3,
    'fourth': 4, '4th': 4,
    'fifth': 5, '5th': 5,
    'sixth': 6, '6th': 6,
    'seventh': 7, '7th': 7,
    'eighth': 8, '8th': 8,
    'ninth': 9, '9th': 9,
    'tenth': 10, '10th': 10,
    'last': -1,
}

ELEMENT_TYPE_SYNONYMS: Dict[str, str] = {
    'btn': 'button', 'buton': 'button', 'buttn': 'button',
    'lnk': 'link', 'hyperlink': 'link', 'anchor': 'link',
    'txt': 'input', 'textfield': 'input', 'text box': 'input', 'text field': 'input',
    'text input': 'input', 'inputfield': 'input', 'input field': 'input',
    'combo box': 'dropdown', 'drop down': 'dropdown', 'drop-down': 'dropdown',
    'select box': 'dropdown', 'selectbox': 'dropdown', 'combo': 'dropdown',
    'chk': 'checkbox', 'check box': 'checkbox', 'check-box': 'checkbox',
    'rdo': 'radio', 'radio btn': 'radio', 'radio-button': 'radio',
    'dlg': 'dialog', 'popup': 'dialog', 'pop-up': 'dialog', 'modal dialog': 'dialog',
    'hdr': 'heading', 'header': 'heading', 'title': 'heading',
    'img': 'image', 'pic': 'image', 'picture': 'image', 'icon': 'image',
    'nav': 'navigation', 'navbar': 'navigation', 'nav bar': 'navigation',
    'menu item': 'menuitem', 'menu-item': 'menuitem', 'menuentry': 'menuitem',
    'tab item': 'tab',
    'toggle': 'switch', 'toggleswitch': 'switch', 'toggle switch': 'switch',
}

_ORDINALS = [(re.compile(rf'\b{re.escape(word)}\b', re.IGNORECASE), number)
             for word, number in ORDINAL_MAP.items()]

_POSITION = re.compile(r'\b(top|bottom|left|right|upper|lower)\b', re.IGNORECASE)

_RELATIONS = [
    (re.compile(r'\s+(?:near|next\s+to|beside)\s+(?:the\s+)?(.+?)$', re.IGNORECASE), 'near'),
    (re.compile(r'\s+(?:inside|within|in)\s+(?:the\s+)?(.+?)$', re.IGNORECASE), 'inside'),
    (re.compile(r'\s+(?:after|below|under)\s+(?:the\s+)?(.+?)$', re.IGNORECASE), 'after'),
    (re.compile(r'\s+(?:before|above|over)\s+(?:the\s+)?(.+?)$', re.IGNORECASE), 'before'),
]

BASE_CONFIDENCE = 0.8
# assertion, action and query bands start here; their rules match free-text UI targets
GENERIC_UI_PRIORITY = 1000


@dataclass
class ElementTarget:
    """Structured description of the element a step acts on"""
    raw_text: str = ''
    element_type: Optional[str] = None
    descriptors: List[str] = field(default_factory=list)
    ordinal: Optional[int] = None
    position: Optional[str] = None
    relative_to: Optional[str] = None
    relation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'rawText': self.raw_text, 'descriptors': list(self.descriptors)}
        optional = {
            'elementType': self.element_type,
            'ordinal': self.ordinal,
            'position': self.position,
            'relativeTo': self.relative_to,
            'relation': self.relation,
        }
        result.update({key: value for key, value in optional.items() if value is not None})
        return result


def canonical_element_type(element_type: Optional[str]) -> Optional[str]:
    if not element_type:
        return None
    return ELEMENT_TYPE_SYNONYMS.get(element_type.lower(), element_type)


def parse_element_target(target_text: str,
                         element_type: Optional[str] = None,
                         literals: Sequence[str] = ()) -> ElementTarget:
    """Break a target description into its parts.

    The first ordinal word found is removed from the text, then a trailing
    relative clause ("near the footer") is split off. Whatever is left becomes
    the descriptor words.
    """
    text = resolve_placeholders(target_text or '', list(literals))

    ordinal = None
    for pattern, number in _ORDINALS:
        if pattern.search(text):
            ordinal = number
            text = pattern.sub('', text, count=1).strip()
            break

    position_match = _POSITION.search(text)
    position = position_match.group(1).lower() if position_match else None

    relative_to = None
    relation = None
    for pattern, name in _RELATIONS:
        relation_match = pattern.search(text)
        if relation_match:
            relative_to = relation_match.group(1).strip()
            relation = name
            text = text[:relation_match.start()].strip()
            break

    return ElementTarget(
        raw_text=target_text or '',
        element_type=canonical_element_type(element_type),
        descriptors=text.split(),
        ordinal=ordinal,
        position=position,
        relative_to=relative_to,
        relation=relation,
    )


def calculate_confidence(rule: GrammarRule, extraction: ExtractionResult, target: ElementTarget) -> float:
    """Score how specific a grammar match is, between 0 and 1"""
    confidence = BASE_CONFIDENCE

    if target.element_type:
        confidence += 0.05
    if target.descriptors:
        confidence += 0.05
    if extraction.value:
        confidence += 0.05
    if rule.priority >= GENERIC_UI_PRIORITY:
        confidence -= 0.02
    if target.ordinal is not None:
        confidence += 0.03

    return round(min(confidence, 1.0), 4)
