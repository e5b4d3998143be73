"""Integration tests for complete flow"""
import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from stepgrammar.cli import check_examples, cli
from stepgrammar.core.config_manager import ConfigManager
from stepgrammar.executor.scenario_resolver import ScenarioResolver
from stepgrammar.parser.feature_parser import FeatureParser
from stepgrammar.parser.step_grammar import StepGrammar

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG = str(PROJECT_ROOT / 'config' / 'config.yaml')
FEATURES = str(PROJECT_ROOT / 'features')


@pytest.fixture(scope="module")
def project_grammar():
    return StepGrammar.from_config(CONFIG, 'dev')


def test_config_loading():
    config = ConfigManager(CONFIG, 'dev').load_config()

    assert config['grammar']['synonyms'] is True
    assert config['grammar']['cache']['ttl'] == 60
    assert config['runner']['parallel'] == 1


def test_project_grammar_has_custom_rule(project_grammar):
    step = project_grammar.parse("Log in as 'admin'").step

    assert step.rule_id == 'custom-login-as'
    assert step.value == 'admin'


def test_every_example_resolves_to_its_rule(project_grammar):
    assert check_examples(project_grammar) == []


def test_sample_features_resolve(project_grammar):
    features = FeatureParser(FEATURES).parse_features()
    results = ScenarioResolver(project_grammar).resolve_features(features)

    assert [result['status'] for result in results] == ['resolved'] * len(results)
    login = next(result for result in results if result['scenario'] == 'Rejected credentials')
    # background (2) plus outline steps (4), once per example row
    assert len(login['steps']) == 12
    assert login['steps'][2]['intent']['value'] == 'admin'


def test_unmatched_steps_are_listed(tmp_path, project_grammar):
    (tmp_path / 'broken.feature').write_text('''
Feature: Broken
  Scenario: Mixed
    Given Navigate to '/home'
    When Juggle the flaming torches
    Then Verify the Home heading is displayed
''', encoding='utf-8')

    results = ScenarioResolver(project_grammar).resolve_features(FeatureParser(str(tmp_path)).parse_features())

    assert results[0]['status'] == 'unresolved'
    assert results[0]['unmatched'] == [{
        'line': 5, 'text': 'Juggle the flaming torches', 'status': 'unmatched', 'error': None,
    }]
    assert results[0]['steps'][2]['intent']['intent'] == 'verify-visible'


def test_parallel_resolution_matches_sequential(project_grammar):
    features = FeatureParser(FEATURES).parse_features()

    sequential = ScenarioResolver(project_grammar, parallel=1).resolve_features(features)
    parallel = ScenarioResolver(project_grammar, parallel=4).resolve_features(features)

    assert parallel == sequential


def test_cli_parse():
    result = CliRunner().invoke(cli, ['--config', CONFIG, 'parse', "Get count of context 'searchResults'"])

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output['ruleId'] == 'ctx-get-count'
    assert output['intent'] == 'get-context-count'
    assert output['params'] == {'sourceContextVar': 'searchResults'}


def test_cli_parse_unmatched():
    result = CliRunner().invoke(cli, ['--config', CONFIG, 'parse', 'Do something entirely unsupported'])

    assert result.exit_code == 1
    assert json.loads(result.stdout)['status'] == 'unmatched'


def test_cli_rules_by_domain():
    result = CliRunner().invoke(cli, ['--config', CONFIG, 'rules', '--domain', 'navigation'])

    assert result.exit_code == 0
    assert 'nav-goto-url-quoted' in result.stdout
    assert 'db-query-named' not in result.stdout


def test_cli_rules_unknown_domain():
    result = CliRunner().invoke(cli, ['--config', CONFIG, 'rules', '--domain', 'nowhere'])

    assert result.exit_code == 1


def test_cli_check():
    result = CliRunner().invoke(cli, ['--config', CONFIG, 'check'])

    assert result.exit_code == 0
    assert 'examples matched their own rule' in result.stdout


def test_cli_features():
    result = CliRunner().invoke(cli, ['--config', CONFIG, 'features', FEATURES, '--tags', '@smoke'])

    assert result.exit_code == 0
    assert '[resolved] User login :: Successful login' in result.stdout
    assert '2/2 scenarios fully resolved' in result.stdout


def test_cli_features_reports_unresolved(tmp_path):
    (tmp_path / 'broken.feature').write_text(
        "Feature: Broken\n  Scenario: Nonsense\n    Given Juggle the flaming torches\n", encoding='utf-8')

    result = CliRunner().invoke(cli, ['--config', CONFIG, 'features', str(tmp_path)])

    assert result.exit_code == 1
    assert 'line 3: Juggle the flaming torches' in result.stdout


def test_cli_bad_config(tmp_path):
    bad = tmp_path / 'config.yaml'
    bad.write_text("runner:\n  parallel: 0\n", encoding='utf-8')

    result = CliRunner().invoke(cli, ['--config', str(bad), 'rules'])

    assert result.exit_code == 1


def test_cli_custom_rule_with_bad_priority(tmp_path):
    bad = tmp_path / 'config.yaml'
    bad.write_text("""
grammar:
  custom_rules:
    - id: custom-ping
      pattern: '^ping$'
      intent: click
      priority: high
""", encoding='utf-8')

    result = CliRunner().invoke(cli, ['--config', str(bad), 'rules'])

    assert result.exit_code == 1
    assert not isinstance(result.exception, ValueError)
