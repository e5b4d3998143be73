"""Configuration management"""
import copy
import os
import yaml
from pathlib import Path
from typing import Dict, Any, List

from dotenv import load_dotenv

from stepgrammar.core.exceptions import ConfigError
from stepgrammar.utils.helpers import deep_get
from stepgrammar.utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_CONFIG = {
    'grammar': {
        'synonyms': True,
        'strict_bands': True,
        'cache': {
            'enabled': True,
            'ttl': 300,
            'max_entries': 1000,
        },
        'custom_rules': [],
    },
    'runner': {
        'parallel': 1,
        'features_dir': 'features',
    },
}


class ConfigManager:
    """Loads config.yaml, merges the environment file and expands ${VAR} values"""

    def __init__(self, config_path: str = 'config/config.yaml', environment: str = 'dev'):
        self.config_path = Path(config_path)
        self.environment = environment
        self.config: Dict[str, Any] = {}

    def load_config(self) -> Dict[str, Any]:
        """Load and merge configuration files"""
        load_dotenv()

        self.config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_path.exists():
            self.config = self._merge_configs(self.config, self._read_yaml(self.config_path))
        else:
            logger.warning(f"Config file not found, using defaults: {self.config_path}")

        env_config_path = self.config_path.parent / 'environments' / f'{self.environment}.yaml'
        if env_config_path.exists():
            env_config = self._read_yaml(env_config_path)

            # overrides replace whole keys inside a section rather than deep merging
            if 'overrides' in env_config:
                overrides = env_config.pop('overrides')
                self._apply_overrides(self.config, overrides)

            self.config = self._merge_configs(self.config, env_config)
        else:
            logger.debug(f"Environment config not found: {env_config_path}")

        self.config = self._process_env_vars(self.config)
        self._validate()

        logger.info(f"Configuration loaded for environment: {self.environment}")
        return self.config

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Top level of {path} must be a mapping")
        return data

    def _merge_configs(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dictionaries"""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_overrides(self, base: Dict, overrides: Dict) -> None:
        """Apply overrides from environment config to base config"""
        for section, values in overrides.items():
            if section in base and isinstance(values, dict) and isinstance(base[section], dict):
                for key, value in values.items():
                    base[section][key] = value
            else:
                base[section] = values

    def _process_env_vars(self, config: Any) -> Any:
        """Replace ${VAR} with environment variables"""
        if isinstance(config, dict):
            return {k: self._process_env_vars(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._process_env_vars(item) for item in config]
        elif isinstance(config, str) and config.startswith('${') and config.endswith('}'):
            var_name = config[2:-1]
            return os.environ.get(var_name, config)
        else:
            return config

    def _validate(self) -> None:
        custom_rules = self.get('grammar.custom_rules')
        if custom_rules is not None and not isinstance(custom_rules, list):
            raise ConfigError("grammar.custom_rules must be a list")

        ttl = self.get('grammar.cache.ttl')
        if not isinstance(ttl, (int, float)) or ttl < 0:
            raise ConfigError(f"grammar.cache.ttl must be a non-negative number, got {ttl!r}")

        parallel = self.get('runner.parallel')
        if not isinstance(parallel, int) or parallel < 1:
            raise ConfigError(f"runner.parallel must be a positive integer, got {parallel!r}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key (supports dot notation)"""
        return deep_get(self.config, key, default)

    def custom_rules(self) -> List[Dict[str, Any]]:
        return list(self.get('grammar.custom_rules', []) or [])
