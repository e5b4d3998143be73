"""Unit tests for the step grammar engine"""
import pytest

from stepgrammar.core.config_manager import DEFAULT_CONFIG
from stepgrammar.core.exceptions import GrammarConfigurationError
from stepgrammar.grammars.types import DatabaseParams, ElementParams, StepIntent
from stepgrammar.parser.step_grammar import ParseStatus, StepGrammar


def _config(**grammar):
    return {'grammar': dict(DEFAULT_CONFIG['grammar'], **grammar)}


def test_parse_to_contract(grammar):
    result = grammar.parse("  Get database row from 'PRIMARY_DB' query 'GET_FIRST_ACTIVE'  ")

    assert result.matched
    assert result.sentence == "Get database row from 'PRIMARY_DB' query 'GET_FIRST_ACTIVE'"
    assert result.step.to_dict() == {
        'ruleId': 'db-get-row',
        'intent': 'get-db-row',
        'category': 'query',
        'targetText': '',
        'params': {'dbAlias': 'PRIMARY_DB', 'dbQuery': 'GET_FIRST_ACTIVE'},
    }


def test_expected_value_in_contract(grammar):
    output = grammar.parse("Verify the API response status is 200").step.to_dict()

    assert output['expectedValue'] == '200'
    assert output['params'] == {'httpMethod': 'STATUS'}
    assert 'value' not in output
    assert 'modifiers' not in output


def test_unmatched_sentence(grammar):
    result = grammar.parse("Do something entirely unsupported")

    assert result.status is ParseStatus.UNMATCHED
    assert not result.matched
    assert result.step is None


@pytest.mark.parametrize("sentence", ["", "   ", None])
def test_blank_sentence(grammar, sentence):
    assert grammar.parse(sentence).status is ParseStatus.UNMATCHED


def test_synonym_pass(grammar):
    result = grammar.parse("Tap the Login button")

    assert result.matched
    assert result.step.rule_id == 'action-click-basic'
    assert result.step.synonym_pass
    assert result.step.raw_text == "Tap the Login button"
    assert result.step.target_text == 'Login'


def test_first_pass_wins_over_synonyms(grammar):
    step = grammar.parse("Press Enter").step

    assert step.rule_id == 'action-press-key'
    assert not step.synonym_pass


def test_synonyms_disabled(registry):
    grammar = StepGrammar(registry=registry, config=_config(synonyms=False))

    assert not grammar.parse("Tap the Login button").matched


def test_element_target_and_confidence(grammar):
    step = grammar.parse("Click the second Delete button").step

    assert step.target.ordinal == 2
    assert step.target.element_type == 'button'
    assert step.target.descriptors == ['Delete']
    assert step.confidence == 0.91


def test_typed_params(grammar):
    db = grammar.parse("""Query database 'PRIMARY_DB' with 'GET_BY_CODE' params '["A100"]'""").step
    ui = grammar.parse("Press Enter on the search field").step

    assert db.typed_params() == DatabaseParams(db_alias='PRIMARY_DB', db_query='GET_BY_CODE',
                                               db_params='["A100"]')
    assert isinstance(ui.typed_params(), ElementParams)
    assert ui.typed_params().key == 'Enter'


def test_cache_hits(registry):
    grammar = StepGrammar(registry=registry)

    first = grammar.parse("Reload the page")
    second = grammar.parse("Reload the page")

    assert first == second
    assert first is not second
    assert first.step is not second.step
    assert grammar.cache_stats() == {'entries': 1, 'hits': 1, 'misses': 1}

    grammar.clear_cache()
    assert grammar.cache_stats() == {'entries': 0, 'hits': 0, 'misses': 0}


def test_cached_results_are_independent(registry):
    grammar = StepGrammar(registry=registry)

    first = grammar.parse("Get count of context 'searchResults'")
    first.step.params['sourceContextVar'] = 'tampered'
    first.step.target.descriptors.append('tampered')

    second = grammar.parse("Get count of context 'searchResults'")
    assert second.step.params == {'sourceContextVar': 'searchResults'}
    assert 'tampered' not in second.step.target.descriptors

    second.step.params['extra'] = 'tampered'
    third = grammar.parse("Get count of context 'searchResults'")

    assert third.step.params == {'sourceContextVar': 'searchResults'}
    assert grammar.cache_stats()['hits'] == 2


def test_cache_disabled(registry):
    grammar = StepGrammar(registry=registry, config=_config(cache={'enabled': False}))

    assert grammar.cache is None
    assert grammar.parse("Reload the page").matched
    assert grammar.cache_stats() == {'entries': 0, 'hits': 0, 'misses': 0}


def test_register_rules_from_config(registry):
    grammar = StepGrammar(registry=registry)
    before = grammar.rule_count()

    loaded = grammar.register_rules_from_config([{
        'id': 'custom-login-as',
        'pattern': r'log\s+in\s+as\s+__QUOTED_(\d+)__',
        'intent': 'set-variable',
        'params': {'variableName': 'currentUser'},
        'value': '$1',
        'examples': ["Log in as 'admin'"],
    }])

    assert loaded == 1
    assert grammar.rule_count() == before + 1
    assert grammar.rule_ids()[0] == 'custom-login-as'
    assert len(registry) == before

    step = grammar.parse("Log in as 'admin'").step
    assert step.intent is StepIntent.SET_VARIABLE
    assert step.value == 'admin'
    assert step.params == {'variableName': 'currentUser'}


def test_register_replaces_previous_custom_rules(registry):
    grammar = StepGrammar(registry=registry)
    grammar.register_rules_from_config([{'id': 'custom-a', 'pattern': '^ping$', 'intent': 'click'}])
    grammar.register_rules_from_config([{'id': 'custom-b', 'pattern': '^pong$', 'intent': 'click'}])

    assert 'custom-a' not in grammar.registry
    assert 'custom-b' in grammar.registry


def test_bad_custom_rules_raise(registry):
    grammar = StepGrammar(registry=registry)

    with pytest.raises(GrammarConfigurationError):
        grammar.register_rules_from_config([{'id': 'nav-go-back', 'pattern': '^back$', 'intent': 'click'}])


def test_custom_rules_from_config_dict():
    grammar = StepGrammar(config=_config(custom_rules=[
        {'id': 'custom-ping', 'pattern': '^ping$', 'intent': 'click', 'examples': ['ping']},
    ]))

    assert grammar.parse("ping").step.rule_id == 'custom-ping'
