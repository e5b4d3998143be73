"""
Declarative intent extractors
Rule tables describe where each field comes from with LiteralRef and GroupRef;
mapped() turns that description into a pure extract(match, literals) function.
"""
import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from stepgrammar.grammars.literals import Literals
from stepgrammar.grammars.types import ExtractionResult, StepModifiers, Extractor

Q = r'__QUOTED_(\d+)__'
OPT_PARAMS = rf'(?:\s+params\s+{Q})?'
VERIFY = r'^verify\s+(?:that\s+)?'

_ABSENT = object()


def _convert(value: Any, convert: Optional[Callable[[str], Any]], default: Any) -> Any:
    if convert is None:
        return value
    try:
        return convert(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class LiteralRef:
    """Field taken from the literal whose slot number a capture group holds"""
    group: int
    optional: bool = False
    default: Any = ''
    convert: Optional[Callable[[str], Any]] = None

    def read(self, match: re.Match, literals: Literals) -> Any:
        if self.optional:
            raw = literals.optional(match, self.group)
            if raw is None:
                return _ABSENT
        else:
            raw = literals.resolve(match, self.group, '')
        return _convert(raw, self.convert, self.default)


@dataclass(frozen=True)
class GroupRef:
    """Field taken from the raw text of a capture group, such as a bare number"""
    group: int
    optional: bool = False
    default: Any = ''
    convert: Optional[Callable[[str], Any]] = None

    def read(self, match: re.Match, literals: Literals) -> Any:
        raw = match.group(self.group) if self.group <= match.re.groups else None
        if raw is None:
            return _ABSENT if self.optional else self.default
        return _convert(raw, self.convert, self.default)


@dataclass(frozen=True)
class JsonRef:
    """Composite field serialized as a compact JSON object"""
    fields: Dict[str, Any]

    def read(self, match: re.Match, literals: Literals) -> str:
        payload = {}
        for name, source in self.fields.items():
            value = _read(source, match, literals)
            if value is not _ABSENT:
                payload[name] = value
        return json.dumps(payload, separators=(',', ':'))


@dataclass(frozen=True)
class FormatRef:
    """String built from a template and other references"""
    template: str
    sources: Dict[str, Any]

    def read(self, match: re.Match, literals: Literals) -> str:
        values = {name: _read(source, match, literals) for name, source in self.sources.items()}
        return self.template.format(**{k: ('' if v is _ABSENT else v) for k, v in values.items()})


@dataclass(frozen=True)
class TargetRef:
    """Free-text element description with literals restored and type words stripped"""
    group: int
    optional: bool = False

    def read(self, match: re.Match, literals: Literals) -> Any:
        raw = match.group(self.group) if self.group <= match.re.groups else None
        if raw is None:
            return _ABSENT if self.optional else ''
        return strip_element_type(literals.substitute(raw))


Ref = Union[LiteralRef, GroupRef, JsonRef, FormatRef, TargetRef]


def _read(source: Any, match: re.Match, literals: Literals) -> Any:
    if hasattr(source, 'read'):
        return source.read(match, literals)
    return source


def _read_optional_text(source: Any, match: re.Match, literals: Literals) -> Optional[str]:
    if source is None:
        return None
    value = _read(source, match, literals)
    return None if value is _ABSENT else value


def mapped(params: Optional[Dict[str, Any]] = None,
           value: Any = None,
           expected_value: Any = None,
           target_text: Any = '',
           modifiers: Optional[StepModifiers] = None,
           element_type: Optional[str] = None) -> Extractor:
    """Build an extract function from a declarative field mapping.

    Values in the mapping may be references or static scalars. Optional
    references whose group did not take part in the match are left out.
    element_type is fixed for rules that always address one kind of element.
    """
    params = dict(params or {})
    modifiers = modifiers or StepModifiers()

    def extract(match: re.Match, literals: Literals) -> ExtractionResult:
        resolved = {}
        for key, source in params.items():
            result = _read(source, match, literals)
            if result is not _ABSENT:
                resolved[key] = result

        return ExtractionResult(
            target_text=_read_optional_text(target_text, match, literals) or '',
            value=_read_optional_text(value, match, literals),
            expected_value=_read_optional_text(expected_value, match, literals),
            params=resolved,
            modifiers=StepModifiers(**vars(modifiers)),
            element_type=element_type,
        )

    extract.mapping = params
    return extract


_REF_SYNTAX = re.compile(r'^([$#])(\d+)(\?)?$')


def parse_reference(value: Any) -> Any:
    """Turn a config value into a reference.

    '$N' is the literal held by group N, '#N' is the raw text of group N and a
    trailing '?' marks the reference optional. Anything else is static.
    """
    if not isinstance(value, str):
        return value
    match = _REF_SYNTAX.match(value.strip())
    if not match:
        return value
    kind, group, optional = match.group(1), int(match.group(2)), bool(match.group(3))
    if kind == '$':
        return LiteralRef(group, optional=optional)
    return GroupRef(group, optional=optional)


def parse_param_mapping(mapping: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Convert a config params mapping into references"""
    return {key: parse_reference(value) for key, value in (mapping or {}).items()}


# UI element helpers

_ELEMENT_TYPE_WORDS = [
    (re.compile(r'\bmenu\s*item\b', re.I), 'menuitem'),
    (re.compile(r'\bradio\s+button\b', re.I), 'radio'),
    (re.compile(r'\bcheck\s*box\b', re.I), 'checkbox'),
    (re.compile(r'\btext\s*box\b', re.I), 'input'),
    (re.compile(r'\bdrop-?down\b', re.I), 'dropdown'),
    (re.compile(r'\b(?:button|btn)\b', re.I), 'button'),
    (re.compile(r'\b(?:link|hyperlink)\b', re.I), 'link'),
    (re.compile(r'\b(?:input|field)\b', re.I), 'input'),
    (re.compile(r'\bradio\b', re.I), 'radio'),
    (re.compile(r'\b(?:select|combobox)\b', re.I), 'dropdown'),
    (re.compile(r'\btab\b', re.I), 'tab'),
    (re.compile(r'\b(?:heading|header)\b', re.I), 'heading'),
    (re.compile(r'\b(?:dialog|modal|popup)\b', re.I), 'dialog'),
    (re.compile(r'\b(?:image|icon|img)\b', re.I), 'image'),
    (re.compile(r'\b(?:switch|toggle)\b', re.I), 'switch'),
    (re.compile(r'\bslider\b', re.I), 'slider'),
    (re.compile(r'\b(?:table|grid)\b', re.I), 'table'),
]

_TRAILING_TYPE_WORD = re.compile(
    r'\s+(?:button|btn|link|field|input|textbox|checkbox|radio|dropdown|tab|menu\s*item|'
    r'heading|header|icon|image|switch|toggle|slider|table|grid|element)$', re.I)


def infer_element_type(text: str) -> Optional[str]:
    """Element type named anywhere in the target description"""
    for pattern, element_type in _ELEMENT_TYPE_WORDS:
        if pattern.search(text):
            return element_type
    return None


def strip_element_type(text: str) -> str:
    """Drop trailing element type words: 'Email input field' -> 'Email'"""
    result = text.strip()
    for _ in range(3):
        stripped = _TRAILING_TYPE_WORD.sub('', result).strip()
        if stripped == result or not stripped:
            break
        result = stripped
    return result


def ui_target(match: re.Match, literals: Literals, group: int) -> Dict[str, Any]:
    """Resolve a free-text element capture into target text and element type"""
    raw = literals.substitute(match.group(group) or '').strip()
    return {'target_text': strip_element_type(raw), 'element_type': infer_element_type(raw)}


def ui_extract(target_group: int,
               params: Optional[Dict[str, Any]] = None,
               value: Any = None,
               expected_value: Any = None,
               modifiers: Optional[StepModifiers] = None,
               element_type: Optional[str] = None) -> Extractor:
    """mapped() for UI rules whose target is free text around the literals.

    element_type is the fallback used when the description names no type.
    """
    base = mapped(params=params, value=value, expected_value=expected_value, modifiers=modifiers)

    def extract(match: re.Match, literals: Literals) -> ExtractionResult:
        result = base(match, literals)
        target = ui_target(match, literals, target_group)
        result.target_text = target['target_text']
        result.element_type = target['element_type'] or element_type
        return result

    extract.mapping = base.mapping
    return extract
