"""Unit tests for rule registry validation and ordering"""
import pytest

from stepgrammar.core.exceptions import GrammarConfigurationError
from stepgrammar.grammars.extractors import mapped
from stepgrammar.grammars.literals import Literals
from stepgrammar.grammars.registry import (
    GrammarTable, RuleRegistry, build_default_registry, default_registry, rule_from_config,
    rules_from_config
)
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent


def _rule(rule_id, priority, pattern=r'^do (\w+)$', examples=('do it',), params=None):
    return GrammarRule(
        id=rule_id,
        pattern=pattern,
        category=StepCategory.ACTION,
        intent=StepIntent.CLICK,
        priority=priority,
        extract=mapped(params=params),
        examples=list(examples),
    )


def test_rules_sorted_by_priority_with_stable_ties():
    table = GrammarTable('demo', (1, 50), [_rule('c', 30), _rule('a', 10), _rule('b', 30)])

    registry = RuleRegistry.from_tables([table])

    assert registry.ids() == ['a', 'c', 'b']
    assert registry.collisions == ((30, 'c', 'b'),)


def test_registry_is_read_only_tuple():
    registry = RuleRegistry.from_tables([GrammarTable('demo', (1, 50), [_rule('a', 1)])])

    assert isinstance(registry.rules, tuple)
    assert 'a' in registry
    assert registry.get('missing') is None
    assert len(registry) == 1


def test_duplicate_ids_rejected():
    tables = [GrammarTable('one', (1, 10), [_rule('same', 1)]),
              GrammarTable('two', (11, 20), [_rule('same', 11)])]

    with pytest.raises(GrammarConfigurationError) as error:
        RuleRegistry.from_tables(tables)

    assert any("duplicate rule id 'same'" in problem for problem in error.value.problems)


def test_unanchored_and_empty_patterns_rejected():
    tables = [GrammarTable('demo', (1, 10), [_rule('loose', 1, pattern=r'do (\w+)'),
                                             _rule('empty', 2, pattern=r'^.*$')])]

    with pytest.raises(GrammarConfigurationError) as error:
        RuleRegistry.from_tables(tables)

    problems = error.value.problems
    assert any("'loose' pattern is not anchored" in problem for problem in problems)
    assert any("'empty' pattern accepts an empty sentence" in problem for problem in problems)


def test_priority_outside_band():
    tables = [GrammarTable('demo', (100, 110), [_rule('stray', 5)])]

    with pytest.raises(GrammarConfigurationError):
        RuleRegistry.from_tables(tables)

    registry = RuleRegistry.from_tables(tables, strict=False)
    assert registry.ids() == ['stray']


def test_undeclared_param_keys_rejected():
    tables = [GrammarTable('demo', (1, 10), [_rule('odd', 1, params={'mysteryKey': 'x'})])]

    with pytest.raises(GrammarConfigurationError) as error:
        RuleRegistry.from_tables(tables)

    assert any("'odd' emits undeclared param keys: mysteryKey" in problem for problem in error.value.problems)


def test_params_outside_typed_variant_rejected():
    tables = [GrammarTable('demo', (1, 10), [_rule('misfiled', 1, params={'dbAlias': 'PRIMARY_DB'})])]

    with pytest.raises(GrammarConfigurationError) as error:
        RuleRegistry.from_tables(tables)

    assert error.value.problems == ["rule 'misfiled' params dbAlias are not fields of ElementParams"]


def test_param_problems_only_logged_when_lenient():
    tables = [GrammarTable('demo', (1, 10), [_rule('odd', 1, params={'mysteryKey': 'x'})])]

    registry = RuleRegistry.from_tables(tables, strict=False)

    assert registry.ids() == ['odd']


def test_custom_rule_with_undeclared_param_rejected():
    with pytest.raises(GrammarConfigurationError):
        build_default_registry(custom_rules=[
            {'id': 'custom-odd', 'pattern': '^odd$', 'intent': 'click', 'params': {'mysteryKey': 'x'}},
        ])


def test_overlapping_bands_rejected():
    tables = [GrammarTable('one', (1, 20), [_rule('a', 1)]),
              GrammarTable('two', (15, 30), [_rule('b', 16)])]

    with pytest.raises(GrammarConfigurationError) as error:
        RuleRegistry.from_tables(tables)

    assert any('overlaps' in problem for problem in error.value.problems)


def test_with_rules_returns_new_registry():
    base = RuleRegistry.from_tables([GrammarTable('demo', (300, 310), [_rule('base', 300)])])

    extended = base.with_rules([_rule('extra', 1)])

    assert base.ids() == ['base']
    assert extended.ids() == ['extra', 'base']
    assert extended.domain_of('extra') == 'custom'


def test_default_registry_is_shared_and_ordered(registry):
    assert default_registry() is registry
    priorities = [rule.priority for rule in registry]
    assert priorities == sorted(priorities)
    assert registry.collisions == ()


def test_default_tables_cover_every_domain(registry):
    domains = {table.domain for table in registry.tables}

    assert domains == {'navigation', 'browser', 'table', 'data', 'form', 'database', 'file',
                       'comparison', 'context', 'mapping', 'orchestration', 'api', 'assertion',
                       'action', 'query'}
    for table in registry.tables:
        assert table.rules, table.domain
        assert all(table.in_band(rule.priority) for rule in table.rules)


def test_describe(registry):
    description = registry.describe('db-get-row')

    assert description['domain'] == 'database'
    assert description['intent'] == 'get-db-row'
    assert description['examples']


def test_rule_from_config():
    rule = rule_from_config({
        'id': 'custom-login',
        'pattern': r'log in as __QUOTED_(\d+)__',
        'intent': 'set-variable',
        'params': {'variableName': 'currentUser'},
        'value': '$1',
    }, priority=1)

    assert rule.pattern == r'^log in as __QUOTED_(\d+)__$'
    assert rule.category is StepCategory.ACTION
    result = rule.extract(rule.match('log in as __QUOTED_0__'), Literals(['admin']))
    assert result.params == {'variableName': 'currentUser'}
    assert result.value == 'admin'


@pytest.mark.parametrize("config, message", [
    ({'pattern': '^x$', 'intent': 'click'}, "needs 'id' and 'pattern'"),
    ({'id': 'x', 'pattern': '^x$', 'intent': 'teleport'}, "unknown intent"),
    ({'id': 'x', 'pattern': '^x$', 'intent': 'click', 'category': 'magic'}, "unknown category"),
    ({'id': 'x', 'pattern': '^(x$', 'intent': 'click'}, "invalid pattern"),
    ({'id': 'x', 'pattern': '^x$', 'intent': 'click', 'priority': 'high'}, "non-numeric priority 'high'"),
    ({'id': 'x', 'pattern': '^x$', 'intent': 'click', 'priority': None}, "non-numeric priority None"),
])
def test_rule_from_config_errors(config, message):
    with pytest.raises(GrammarConfigurationError, match=message):
        rule_from_config(config, priority=1)


def test_rules_from_config_numbers_the_custom_band():
    configs = [{'id': f'r{i}', 'pattern': f'^rule {i}$', 'intent': 'click'} for i in range(3)]

    assert [rule.priority for rule in rules_from_config(configs)] == [1, 2, 3]


def test_too_many_custom_rules():
    configs = [{'id': f'r{i}', 'pattern': f'^rule {i}$', 'intent': 'click'} for i in range(100)]

    with pytest.raises(GrammarConfigurationError, match='Too many custom rules'):
        rules_from_config(configs)


def test_build_default_registry_with_custom_rules():
    registry = build_default_registry(custom_rules=[
        {'id': 'custom-ping', 'pattern': '^ping$', 'intent': 'click', 'examples': ['ping']},
    ])

    assert registry.ids()[0] == 'custom-ping'
    assert registry.domain_of('custom-ping') == 'custom'
