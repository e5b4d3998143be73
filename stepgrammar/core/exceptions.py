"""Exceptions raised by stepgrammar"""
from typing import List, Optional


class StepGrammarError(Exception):
    """Base class for all stepgrammar errors"""


class GrammarConfigurationError(StepGrammarError):
    """Raised when rule tables fail load-time validation"""

    def __init__(self, message: str, problems: Optional[List[str]] = None):
        self.problems = problems or []
        if self.problems:
            message = message + ":\n  - " + "\n  - ".join(self.problems)
        super().__init__(message)


class ConfigError(StepGrammarError):
    """Raised when a configuration file cannot be loaded or is malformed"""
