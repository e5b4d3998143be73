"""Unit tests for configuration loading and the parse cache"""
from pathlib import Path

import pytest

from stepgrammar.core.cache_manager import ParseCache
from stepgrammar.core.config_manager import DEFAULT_CONFIG, ConfigManager
from stepgrammar.core.exceptions import ConfigError

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding='utf-8')


def test_defaults_when_file_missing(tmp_path):
    config = ConfigManager(str(tmp_path / 'missing.yaml'), 'dev').load_config()

    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_environment_file_merges_and_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv('FEATURES_HOME', 'specs/features')
    _write(tmp_path / 'config.yaml', """
grammar:
  synonyms: false
  cache:
    ttl: 120
runner:
  parallel: 2
""")
    _write(tmp_path / 'environments' / 'ci.yaml', """
grammar:
  cache:
    enabled: false
overrides:
  runner:
    features_dir: ${FEATURES_HOME}
""")

    manager = ConfigManager(str(tmp_path / 'config.yaml'), 'ci')
    config = manager.load_config()

    assert manager.get('grammar.synonyms') is False
    assert manager.get('grammar.cache.ttl') == 120
    assert manager.get('grammar.cache.enabled') is False
    assert manager.get('grammar.cache.max_entries') == 1000
    assert config['runner'] == {'parallel': 2, 'features_dir': 'specs/features'}


def test_unknown_key_default(tmp_path):
    manager = ConfigManager(str(tmp_path / 'missing.yaml'))
    manager.load_config()

    assert manager.get('grammar.nothing.here', 'fallback') == 'fallback'
    assert manager.custom_rules() == []


@pytest.mark.parametrize("content, message", [
    ("grammar: [1, 2", "Invalid YAML"),
    ("- just\n- a list\n", "must be a mapping"),
    ("grammar:\n  custom_rules: {id: x}\n", "custom_rules must be a list"),
    ("grammar:\n  cache:\n    ttl: -5\n", "ttl must be a non-negative number"),
    ("runner:\n  parallel: 0\n", "parallel must be a positive integer"),
])
def test_invalid_config(tmp_path, content, message):
    _write(tmp_path / 'config.yaml', content)

    with pytest.raises(ConfigError, match=message):
        ConfigManager(str(tmp_path / 'config.yaml')).load_config()


def test_project_config_loads():
    manager = ConfigManager(str(PROJECT_ROOT / 'config' / 'config.yaml'), 'ci')
    manager.load_config()

    assert manager.get('grammar.cache.enabled') is False
    assert manager.get('runner.parallel') == 4
    assert [rule['id'] for rule in manager.custom_rules()] == ['custom-login-as']


def test_cache_expiry():
    cache = ParseCache(ttl=10)

    cache.save('step', 'result')
    assert cache.get('step') == 'result'

    cache.cache['step']['timestamp'] -= 11
    assert cache.get('step') is None
    assert cache.stats() == {'entries': 1, 'hits': 1, 'misses': 1}


def test_cache_evicts_oldest():
    cache = ParseCache(max_entries=2)

    cache.save('a', 1)
    cache.save('b', 2)
    cache.save('c', 3)

    assert cache.get('a') is None
    assert cache.get('b') == 2
    assert cache.get('c') == 3
