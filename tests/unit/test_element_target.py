"""Unit tests for synonyms, element targets and confidence"""
import pytest

from stepgrammar.grammars.extractors import mapped
from stepgrammar.grammars.types import ExtractionResult, GrammarRule, StepCategory, StepIntent
from stepgrammar.parser.element_target import (
    ElementTarget, calculate_confidence, canonical_element_type, parse_element_target
)
from stepgrammar.parser.synonyms import normalize_synonyms


@pytest.mark.parametrize("text, expected", [
    ("Tap the Login button", "click the Login button"),
    ("Ensure the banner is visible", "verify the banner is visible"),
    ("Mouse over the avatar", "hover the avatar"),
    ("Double click the row", "double-click the row"),
    ("Pick __QUOTED_0__ from the Size dropdown", "select __QUOTED_0__ from the Size dropdown"),
])
def test_normalize_synonyms(text, expected):
    assert normalize_synonyms(text) == expected


def test_synonyms_need_whole_words():
    assert normalize_synonyms("Click the Tapestry link") == "Click the Tapestry link"
    assert normalize_synonyms("Click __QUOTED_0__") == "Click __QUOTED_0__"


def test_ordinal_and_descriptors():
    target = parse_element_target("second Delete", 'button')

    assert target.ordinal == 2
    assert target.descriptors == ['Delete']
    assert target.element_type == 'button'


def test_last_and_numeric_ordinals():
    assert parse_element_target("last row").ordinal == -1
    assert parse_element_target("3rd item").ordinal == 3


def test_relative_reference():
    target = parse_element_target("Edit near the footer")

    assert target.relation == 'near'
    assert target.relative_to == 'footer'
    assert target.descriptors == ['Edit']


def test_position_cue():
    target = parse_element_target("top Save")

    assert target.position == 'top'


def test_placeholders_resolved():
    target = parse_element_target("__QUOTED_0__ inside the __QUOTED_1__", None, ['Save', 'Settings dialog'])

    assert target.descriptors == ['Save']
    assert target.relation == 'inside'
    assert target.relative_to == 'Settings dialog'


def test_canonical_element_type():
    assert canonical_element_type('btn') == 'button'
    assert canonical_element_type('Drop Down') == 'dropdown'
    assert canonical_element_type('slider') == 'slider'
    assert canonical_element_type(None) is None


def test_to_dict_skips_empty_fields():
    assert ElementTarget(raw_text='Save', descriptors=['Save']).to_dict() == \
        {'rawText': 'Save', 'descriptors': ['Save']}


def _rule(priority):
    return GrammarRule(id='r', pattern=r'^x$', category=StepCategory.ACTION, intent=StepIntent.CLICK,
                       priority=priority, extract=mapped())


def test_confidence_scoring():
    bare = calculate_confidence(_rule(5), ExtractionResult(), ElementTarget())
    assert bare == 0.8

    target = ElementTarget(element_type='button', descriptors=['Save'], ordinal=1)
    rich = calculate_confidence(_rule(1110), ExtractionResult(value='x'), target)
    assert rich == 0.96


@pytest.mark.parametrize("priority, expected", [
    (360, 0.8),
    (560, 0.8),
    (999, 0.8),
    (1000, 0.78),
    (1249, 0.78),
])
def test_generic_ui_bands_are_penalized(priority, expected):
    assert calculate_confidence(_rule(priority), ExtractionResult(), ElementTarget()) == expected


def test_structured_rule_outscores_generic_ui_rule(grammar):
    database = grammar.parse("Get database row from 'PRIMARY_DB' query 'GET_FIRST_ACTIVE'").step
    url = grammar.parse("Get the current URL").step

    assert database.confidence == 0.8
    assert url.confidence == 0.78


def test_confidence_is_capped():
    target = ElementTarget(element_type='button', descriptors=['Save'], ordinal=1)

    assert calculate_confidence(_rule(1), ExtractionResult(value='x'), target) == 0.98
    assert calculate_confidence(_rule(1), ExtractionResult(value='x'), target) <= 1.0
