"""Shared fixtures"""
import pytest

from stepgrammar.grammars.matcher import RuleMatcher
from stepgrammar.grammars.registry import default_registry
from stepgrammar.parser.quoted_extractor import extract_quoted
from stepgrammar.parser.step_grammar import StepGrammar


@pytest.fixture(scope="session")
def registry():
    return default_registry()


@pytest.fixture(scope="session")
def matcher(registry):
    return RuleMatcher(registry)


@pytest.fixture
def grammar(registry):
    return StepGrammar(registry=registry)


@pytest.fixture
def match_sentence(matcher):
    """Extract literals and match in one call"""
    def _match(sentence):
        quoted = extract_quoted(sentence)
        return matcher.match(quoted.normalized, quoted.values)
    return _match
