"""Every example sentence must be matched first by the rule that declares it"""
import pytest

from stepgrammar.grammars.matcher import RuleMatcher
from stepgrammar.grammars.registry import default_registry
from stepgrammar.grammars.types import PARAM_KEYS, typed_params
from stepgrammar.parser.quoted_extractor import extract_quoted

EXAMPLES = [(rule.id, example) for rule in default_registry() for example in rule.examples]


def test_every_rule_has_examples():
    assert all(rule.examples for rule in default_registry())


@pytest.mark.parametrize("rule_id, example", EXAMPLES, ids=[f"{rule_id}:{i}" for i, (rule_id, _) in
                                                            enumerate(EXAMPLES)])
def test_example_matches_its_own_rule_first(rule_id, example):
    matcher = RuleMatcher(default_registry())
    quoted = extract_quoted(example)

    candidates = matcher.candidates(quoted.normalized)

    assert candidates, f"'{example}' matched nothing"
    assert candidates[0] == rule_id, f"'{example}' is shadowed by {candidates[0]}"

    outcome = matcher.match(quoted.normalized, quoted.values)
    assert outcome.matched
    assert outcome.unresolved == ()

    params = outcome.extraction.params
    assert set(params) <= PARAM_KEYS, f"'{example}' emits {sorted(set(params) - PARAM_KEYS)}"
    assert typed_params(outcome.rule.intent, params).extras == {}
