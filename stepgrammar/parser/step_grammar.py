"""
Step grammar engine
Turns one English test step into a structured intent: quoted literals are
pulled out, the literal-free sentence is matched against the rule registry and
the winning rule's extraction is wrapped into a ParsedStep.
"""
import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from stepgrammar.core.cache_manager import ParseCache
from stepgrammar.core.config_manager import DEFAULT_CONFIG, ConfigManager
from stepgrammar.grammars.matcher import MatchOutcome, MatchStatus, RuleMatcher
from stepgrammar.grammars.registry import RuleRegistry, build_default_registry, rules_from_config
from stepgrammar.grammars.types import StepCategory, StepIntent, StepModifiers, TypedParams, typed_params
from stepgrammar.parser.element_target import ElementTarget, calculate_confidence, parse_element_target
from stepgrammar.parser.quoted_extractor import extract_quoted
from stepgrammar.parser.synonyms import normalize_synonyms
from stepgrammar.utils.helpers import deep_get, truncate
from stepgrammar.utils.logger import setup_logger

logger = setup_logger(__name__)


class ParseStatus(Enum):
    MATCHED = "matched"
    UNMATCHED = "unmatched"
    EXTRACTION_FAILED = "extraction_failed"


@dataclass
class ParsedStep:
    """A step sentence resolved to one intent"""
    rule_id: str
    intent: StepIntent
    category: StepCategory
    target_text: str = ''
    value: Optional[str] = None
    expected_value: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)
    modifiers: StepModifiers = field(default_factory=StepModifiers)
    raw_text: str = ''
    target: Optional[ElementTarget] = None
    confidence: float = 0.0
    synonym_pass: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Structured intent in the shape downstream executors consume"""
        result: Dict[str, Any] = {
            'ruleId': self.rule_id,
            'intent': self.intent.value,
            'category': self.category.value,
            'targetText': self.target_text,
        }
        if self.value is not None:
            result['value'] = self.value
        if self.expected_value is not None:
            result['expectedValue'] = self.expected_value
        result['params'] = dict(self.params)
        if self.modifiers:
            result['modifiers'] = self.modifiers.to_dict()
        return result

    def typed_params(self) -> TypedParams:
        return typed_params(self.intent, self.params)


@dataclass
class ParseResult:
    status: ParseStatus
    sentence: str = ''
    step: Optional[ParsedStep] = None
    rule_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.status is ParseStatus.MATCHED


class StepGrammar:
    """Parses English test steps into structured intents.

    Matching is deterministic: the registry is ordered by priority and the
    first rule whose pattern covers the whole sentence wins. When nothing
    matches and synonym normalization is enabled, the sentence is retried once
    with non-canonical verbs rewritten (tap -> click, ensure -> verify).
    """

    def __init__(self, registry: Optional[RuleRegistry] = None, config: Optional[Dict[str, Any]] = None):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.synonyms_enabled = bool(self._setting('grammar.synonyms', True))

        if registry is None:
            registry = build_default_registry(
                custom_rules=self._setting('grammar.custom_rules') or None,
                strict=bool(self._setting('grammar.strict_bands', True)),
            )
        self.registry = registry
        self.matcher = RuleMatcher(registry)

        self.cache: Optional[ParseCache] = None
        if self._setting('grammar.cache.enabled', True):
            self.cache = ParseCache(ttl=self._setting('grammar.cache.ttl', 300),
                                    max_entries=self._setting('grammar.cache.max_entries', 1000))

    @classmethod
    def from_config(cls, config_path: str = 'config/config.yaml', environment: str = 'dev') -> 'StepGrammar':
        """Build an engine from config.yaml and its environment file"""
        config_manager = ConfigManager(config_path, environment)
        return cls(config=config_manager.load_config())

    def _setting(self, key: str, default: Any = None) -> Any:
        value = deep_get(self.config, key)
        if value is None:
            value = deep_get(DEFAULT_CONFIG, key, default)
        return value

    def parse(self, sentence: str) -> ParseResult:
        """Parse one step sentence. An unmatched sentence is a result, not an error.

        Every call returns a result owned by the caller; the cache keeps its
        own copy.
        """
        text = (sentence or '').strip()
        if not text:
            return ParseResult(ParseStatus.UNMATCHED, sentence=text)

        if self.cache is not None:
            cached = self.cache.get(text)
            if cached is not None:
                return copy.deepcopy(cached)

        result = self._parse(text)

        if self.cache is not None:
            self.cache.save(text, copy.deepcopy(result))
        return result

    def parse_many(self, sentences: Sequence[str]) -> List[ParseResult]:
        return [self.parse(sentence) for sentence in sentences]

    def _parse(self, text: str) -> ParseResult:
        quoted = extract_quoted(text)
        literals = quoted.values

        outcome = self.matcher.match(quoted.normalized, literals)
        synonym_pass = False

        if outcome.status is MatchStatus.UNMATCHED and self.synonyms_enabled:
            normalized = normalize_synonyms(quoted.normalized)
            if normalized != quoted.normalized:
                logger.debug(f"Retrying with synonyms: '{truncate(normalized)}'")
                outcome = self.matcher.match(normalized, literals)
                synonym_pass = True

        if outcome.status is MatchStatus.EXTRACTION_FAILED:
            return ParseResult(ParseStatus.EXTRACTION_FAILED, sentence=text,
                               rule_id=outcome.rule_id, error=outcome.error)

        if not outcome.matched:
            logger.debug(f"Unmatched step: '{truncate(text)}'")
            return ParseResult(ParseStatus.UNMATCHED, sentence=text)

        step = self._build_step(text, outcome, literals, synonym_pass)
        return ParseResult(ParseStatus.MATCHED, sentence=text, step=step, rule_id=step.rule_id)

    def _build_step(self, text: str, outcome: MatchOutcome, literals: List[str],
                    synonym_pass: bool) -> ParsedStep:
        rule = outcome.rule
        extraction = outcome.extraction
        target = parse_element_target(extraction.target_text, extraction.element_type, literals)

        return ParsedStep(
            rule_id=rule.id,
            intent=rule.intent,
            category=rule.category,
            target_text=extraction.target_text,
            value=extraction.value,
            expected_value=extraction.expected_value,
            params=dict(extraction.params),
            modifiers=extraction.modifiers,
            raw_text=text,
            target=target,
            confidence=calculate_confidence(rule, extraction, target),
            synonym_pass=synonym_pass,
        )

    def register_rules_from_config(self, rule_configs: Sequence[Dict[str, Any]]) -> int:
        """Replace the custom rules with the ones given and return how many were loaded.

        The registry is rebuilt rather than mutated; parses already running
        keep the registry they started with.
        """
        rules = rules_from_config(rule_configs)
        registry = self.registry.with_rules(rules, strict=bool(self._setting('grammar.strict_bands', True)))
        self.registry = registry
        self.matcher = RuleMatcher(registry)
        self.clear_cache()
        logger.info(f"Registered {len(rules)} custom grammar rules")
        return len(rules)

    def rule_count(self) -> int:
        return len(self.registry)

    def rule_ids(self) -> List[str]:
        return self.registry.ids()

    def clear_cache(self) -> None:
        if self.cache is not None:
            self.cache.clear_cache()

    def cache_stats(self) -> Dict[str, int]:
        if self.cache is None:
            return {'entries': 0, 'hits': 0, 'misses': 0}
        return self.cache.stats()
