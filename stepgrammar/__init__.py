"""Rule-based grammar that turns English test steps into structured intents"""
__version__ = "1.0.0"

from stepgrammar.parser.step_grammar import ParsedStep, ParseResult, ParseStatus, StepGrammar

__all__ = ['StepGrammar', 'ParsedStep', 'ParseResult', 'ParseStatus', '__version__']
