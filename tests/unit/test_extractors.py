"""Unit tests for literal references and declarative extractors"""
import json
import re

from stepgrammar.grammars.extractors import (
    Q, FormatRef, GroupRef, JsonRef, LiteralRef, TargetRef, infer_element_type, mapped,
    parse_param_mapping, parse_reference, strip_element_type, ui_extract
)
from stepgrammar.grammars.literals import Literals
from stepgrammar.grammars.types import StepModifiers


def _match(pattern, text):
    return re.fullmatch(pattern, text, re.IGNORECASE)


def test_literals_resolve_by_slot():
    match = _match(rf'use {Q} and {Q}', 'use __QUOTED_1__ and __QUOTED_0__')
    literals = Literals(['first', 'second'])

    assert literals.resolve(match, 1) == 'second'
    assert literals.resolve(match, 2) == 'first'
    assert literals.unresolved == []


def test_literals_out_of_range_uses_default_and_records():
    match = _match(rf'use {Q}', 'use __QUOTED_7__')
    literals = Literals(['only'])

    assert literals.resolve(match, 1, 'fallback') == 'fallback'
    assert literals.unresolved == ['slot 7 of 1']


def test_literals_optional_group():
    match = _match(rf'use {Q}(?: with {Q})?', 'use __QUOTED_0__')
    literals = Literals(['a'])

    assert literals.optional(match, 2) is None
    assert literals.optional(match, 1) == 'a'


def test_mapped_omits_absent_optional_params():
    extract = mapped(params={
        'dbAlias': LiteralRef(1),
        'dbParams': LiteralRef(2, optional=True),
        'kind': 'static',
    })
    pattern = rf'^run {Q}(?:\s+params\s+{Q})?$'

    without = extract(_match(pattern, 'run __QUOTED_0__'), Literals(['DB']))
    assert without.params == {'dbAlias': 'DB', 'kind': 'static'}

    with_params = extract(_match(pattern, 'run __QUOTED_0__ params __QUOTED_1__'), Literals(['DB', '[1]']))
    assert with_params.params == {'dbAlias': 'DB', 'dbParams': '[1]', 'kind': 'static'}


def test_conversion_failure_falls_back_to_default():
    extract = mapped(params={'rowIndex': LiteralRef(1, default=0, convert=int)})

    result = extract(_match(rf'row {Q}', 'row __QUOTED_0__'), Literals(['two']))

    assert result.params == {'rowIndex': 0}


def test_group_ref_reads_raw_text():
    extract = mapped(params={'timeout': GroupRef(1, convert=int)}, expected_value=GroupRef(1))

    result = extract(_match(r'timeout (\d+)', 'timeout 3000'), Literals([]))

    assert result.params == {'timeout': 3000}
    assert result.expected_value == '3000'


def test_json_ref_builds_compact_json():
    extract = mapped(params={'apiAuthParams': JsonRef({'username': LiteralRef(1), 'password': LiteralRef(2)})})

    result = extract(_match(rf'auth {Q} {Q}', 'auth __QUOTED_0__ __QUOTED_1__'), Literals(['admin', 's3cret']))

    assert json.loads(result.params['apiAuthParams']) == {'username': 'admin', 'password': 's3cret'}
    assert ' ' not in result.params['apiAuthParams']


def test_format_ref():
    extract = mapped(params={'apiUrl': FormatRef('{base}/{path}', {'base': LiteralRef(1), 'path': LiteralRef(2)})})

    result = extract(_match(rf'{Q} {Q}', '__QUOTED_0__ __QUOTED_1__'), Literals(['https://x.io', 'users']))

    assert result.params['apiUrl'] == 'https://x.io/users'


def test_target_ref_restores_literals_and_strips_type():
    extract = mapped(params={'dropTarget': TargetRef(1), 'tableRef': TargetRef(2, optional=True)})

    result = extract(_match(r'drag to (?:the )?(.+?)(?: in (.+?))?', 'drag to the __QUOTED_0__ button'),
                     Literals(['Done']))

    assert result.params == {'dropTarget': 'Done'}


def test_mapped_copies_modifiers():
    extract = mapped(modifiers=StepModifiers(negated=True))

    first = extract(_match(r'x', 'x'), Literals([]))
    second = extract(_match(r'x', 'x'), Literals([]))
    first.modifiers.force = True

    assert second.modifiers == StepModifiers(negated=True)


def test_ui_extract_infers_type_and_falls_back():
    extract = ui_extract(1, element_type='input')

    typed = extract(_match(r'click (?:the )?(.+?)', 'click the Login link'), Literals([]))
    assert typed.target_text == 'Login'
    assert typed.element_type == 'link'

    untyped = extract(_match(r'click (?:the )?(.+?)', 'click the Quantity'), Literals([]))
    assert untyped.target_text == 'Quantity'
    assert untyped.element_type == 'input'


def test_element_type_words():
    assert infer_element_type('the Country drop-down') == 'dropdown'
    assert infer_element_type('Remember me check box') == 'checkbox'
    assert infer_element_type('Save') is None
    assert strip_element_type('Email input field') == 'Email'
    assert strip_element_type('button') == 'button'


def test_parse_reference_syntax():
    assert parse_reference('$2') == LiteralRef(2)
    assert parse_reference('$1?') == LiteralRef(1, optional=True)
    assert parse_reference('#3') == GroupRef(3)
    assert parse_reference('GET') == 'GET'
    assert parse_reference(5) == 5
    assert parse_param_mapping({'a': '$1', 'b': 'x'}) == {'a': LiteralRef(1), 'b': 'x'}
