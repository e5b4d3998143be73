"""Unit tests for the rule matcher"""
from stepgrammar.grammars.extractors import mapped
from stepgrammar.grammars.matcher import MatchStatus, RuleMatcher
from stepgrammar.grammars.registry import GrammarTable, RuleRegistry
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent


def test_context_count(match_sentence):
    outcome = match_sentence("Get count of context 'searchResults'")

    assert outcome.status is MatchStatus.MATCHED
    assert outcome.rule_id == 'ctx-get-count'
    assert outcome.rule.intent is StepIntent.GET_CONTEXT_COUNT
    assert outcome.extraction.params == {'sourceContextVar': 'searchResults'}


def test_database_query_with_params(match_sentence):
    outcome = match_sentence("""Query database 'PRIMARY_DB' with 'GET_BY_CODE' params '["A100"]'""")

    assert outcome.rule_id == 'db-query-named-params'
    assert outcome.rule.intent is StepIntent.DB_QUERY
    assert outcome.extraction.params == {
        'dbAlias': 'PRIMARY_DB',
        'dbQuery': 'GET_BY_CODE',
        'dbParams': '["A100"]',
    }


def test_api_status(match_sentence):
    outcome = match_sentence("Verify the API response status is 200")

    assert outcome.rule_id == 'api-verify-status'
    assert outcome.extraction.expected_value == '200'
    assert outcome.extraction.params['httpMethod'] == 'STATUS'


def test_optional_params_clause_is_omitted(match_sentence):
    outcome = match_sentence("Get database row from 'PRIMARY_DB' query 'GET_FIRST_ACTIVE'")

    assert outcome.rule_id == 'db-get-row'
    assert outcome.extraction.params == {'dbAlias': 'PRIMARY_DB', 'dbQuery': 'GET_FIRST_ACTIVE'}
    assert 'dbParams' not in outcome.extraction.params


def test_unsupported_sentence_is_a_value(match_sentence):
    outcome = match_sentence("Do something entirely unsupported")

    assert outcome.status is MatchStatus.UNMATCHED
    assert not outcome.matched
    assert outcome.rule is None
    assert outcome.rule_id is None


def test_match_is_case_insensitive(match_sentence):
    outcome = match_sentence("GET COUNT OF CONTEXT 'searchResults'")

    assert outcome.rule_id == 'ctx-get-count'


def test_structured_tables_win_over_ui_rules(match_sentence):
    outcome = match_sentence("Verify the API response body contains 'success'")

    assert outcome.rule_id == 'api-verify-body-contains'


def test_same_input_same_result(match_sentence):
    first = match_sentence("Click the Submit button")
    second = match_sentence("Click the Submit button")

    assert first.rule_id == second.rule_id == 'action-click-basic'
    assert first.extraction == second.extraction


def test_candidates_list_shadowed_rules(matcher):
    candidates = matcher.candidates("Verify the message contains __QUOTED_0__")

    assert candidates[0] == 'assert-contains-text'
    assert candidates == sorted(candidates, key=lambda rule_id: matcher.registry.get(rule_id).priority)


def _broken(match, literals):
    raise KeyError('boom')


def test_extraction_failure_is_reported_and_not_retried():
    rules = [
        GrammarRule(id='broken', pattern=r'^ping$', category=StepCategory.ACTION,
                    intent=StepIntent.CLICK, priority=1, extract=_broken, examples=['ping']),
        GrammarRule(id='fallback', pattern=r'^(\w+)$', category=StepCategory.ACTION,
                    intent=StepIntent.CLICK, priority=2, extract=mapped(), examples=['ping']),
    ]
    matcher = RuleMatcher(RuleRegistry.from_tables([GrammarTable('demo', (1, 10), rules)]))

    outcome = matcher.match('ping')

    assert outcome.status is MatchStatus.EXTRACTION_FAILED
    assert outcome.rule_id == 'broken'
    assert 'boom' in outcome.error


def test_unresolved_literal_reference_is_recorded(matcher):
    outcome = matcher.match("Get count of context __QUOTED_4__", ['only one'])

    assert outcome.matched
    assert outcome.extraction.params == {'sourceContextVar': ''}
    assert outcome.unresolved == ('slot 4 of 1',)
