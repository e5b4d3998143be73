"""
Rule registry
Concatenates the domain grammar tables, validates them and sorts every rule
into one priority-ordered, read-only sequence
"""
import re
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from stepgrammar.core.exceptions import GrammarConfigurationError
from stepgrammar.grammars.extractors import mapped, parse_param_mapping, parse_reference
from stepgrammar.grammars.types import (
    INTENT_PARAM_TYPES, PARAM_KEYS, GrammarRule, StepCategory, StepIntent, typed_params
)
from stepgrammar.utils.logger import setup_logger

logger = setup_logger(__name__)

CUSTOM_BAND = (1, 99)


@dataclass(frozen=True)
class GrammarTable:
    """Rules contributed by one domain, with the priority band they own"""
    domain: str
    band: Tuple[int, int]
    rules: Sequence[GrammarRule] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'rules', tuple(self.rules))

    def in_band(self, priority: int) -> bool:
        return self.band[0] <= priority <= self.band[1]


class RuleRegistry:
    """All grammar rules in ascending priority order.

    Built once through from_tables and never mutated afterwards. Equal
    priorities keep their registration order, so the ordering is fully
    deterministic.
    """

    def __init__(self, tables: Sequence[GrammarTable], rules: Sequence[GrammarRule],
                 collisions: Sequence[Tuple[int, str, str]] = ()):
        self.tables: Tuple[GrammarTable, ...] = tuple(tables)
        self.rules: Tuple[GrammarRule, ...] = tuple(rules)
        self.collisions: Tuple[Tuple[int, str, str], ...] = tuple(collisions)
        self._by_id: Dict[str, GrammarRule] = {rule.id: rule for rule in self.rules}
        self._domains: Dict[str, str] = {
            rule.id: table.domain for table in self.tables for rule in table.rules
        }

    @classmethod
    def from_tables(cls, tables: Sequence[GrammarTable], strict: bool = True) -> 'RuleRegistry':
        """Validate and merge grammar tables.

        Raises GrammarConfigurationError listing every problem found. Every
        param key a rule emits must be in PARAM_KEYS and a field of the typed
        variant for its intent. With strict=False a rule outside its table
        band or with stray param keys is only logged.
        """
        problems: List[str] = []

        _check_bands(tables, problems)

        seen: Dict[str, str] = {}
        registered: List[GrammarRule] = []
        for table in tables:
            for rule in table.rules:
                if rule.id in seen:
                    problems.append(
                        f"duplicate rule id '{rule.id}' in {table.domain} (already in {seen[rule.id]})")
                    continue
                seen[rule.id] = table.domain

                if not (rule.pattern.startswith('^') and rule.pattern.endswith('$')):
                    problems.append(f"rule '{rule.id}' pattern is not anchored with ^...$")

                if rule.match('') is not None:
                    problems.append(f"rule '{rule.id}' pattern accepts an empty sentence")

                if not table.in_band(rule.priority):
                    message = (f"rule '{rule.id}' priority {rule.priority} is outside the "
                               f"{table.domain} band {table.band[0]}-{table.band[1]}")
                    if strict:
                        problems.append(message)
                    else:
                        logger.warning(message)

                for message in _param_problems(rule):
                    if strict:
                        problems.append(message)
                    else:
                        logger.warning(message)

                if not rule.examples:
                    logger.warning(f"Rule '{rule.id}' has no example sentences")

                registered.append(rule)

        if problems:
            for problem in problems:
                logger.error(f"Grammar configuration: {problem}")
            raise GrammarConfigurationError("Invalid grammar tables", problems)

        ordered = sorted(registered, key=lambda rule: rule.priority)
        collisions = _find_collisions(ordered)
        for priority, first, second in collisions:
            logger.warning(f"Priority collision at {priority}: '{first}' and '{second}' "
                           f"are ordered by registration")

        logger.debug(f"Registry built: {len(ordered)} rules from {len(tables)} tables")
        return cls(tables, ordered, collisions)

    def with_rules(self, extra: Sequence[GrammarRule], domain: str = 'custom',
                   band: Tuple[int, int] = CUSTOM_BAND, strict: bool = True) -> 'RuleRegistry':
        """New registry with an additional table; this one is left untouched"""
        tables = [table for table in self.tables if table.domain != domain]
        tables.insert(0, GrammarTable(domain, band, extra))
        return RuleRegistry.from_tables(tables, strict=strict)

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[GrammarRule]:
        return iter(self.rules)

    def __contains__(self, rule_id: str) -> bool:
        return rule_id in self._by_id

    def get(self, rule_id: str) -> Optional[GrammarRule]:
        return self._by_id.get(rule_id)

    def ids(self) -> List[str]:
        return [rule.id for rule in self.rules]

    def domain_of(self, rule_id: str) -> Optional[str]:
        return self._domains.get(rule_id)

    def describe(self, rule_id: str) -> Optional[Dict[str, Any]]:
        """Describe a rule for diagnostics"""
        rule = self.get(rule_id)
        if rule is None:
            return None
        return {
            'id': rule.id,
            'domain': self.domain_of(rule_id),
            'priority': rule.priority,
            'category': rule.category.value,
            'intent': rule.intent.value,
            'pattern': rule.pattern,
            'examples': list(rule.examples),
        }


def _check_bands(tables: Sequence[GrammarTable], problems: List[str]) -> None:
    for i, table in enumerate(tables):
        low, high = table.band
        if low > high:
            problems.append(f"{table.domain} band {low}-{high} is empty")
        for other in tables[i + 1:]:
            if other.domain == table.domain:
                problems.append(f"domain '{table.domain}' is registered twice")
            elif low <= other.band[1] and other.band[0] <= high:
                problems.append(f"{table.domain} band {low}-{high} overlaps "
                                f"{other.domain} band {other.band[0]}-{other.band[1]}")


def _param_problems(rule: GrammarRule) -> List[str]:
    """Param keys a rule emits that the shared vocabulary or its typed variant does not know"""
    keys = set(getattr(rule.extract, 'mapping', {}))
    messages = []
    undeclared = sorted(keys - PARAM_KEYS)
    if undeclared:
        messages.append(f"rule '{rule.id}' emits undeclared param keys: {', '.join(undeclared)}")
    extras = typed_params(rule.intent, dict.fromkeys(keys)).extras
    if extras:
        messages.append(f"rule '{rule.id}' params {', '.join(sorted(extras))} are not fields of "
                        f"{INTENT_PARAM_TYPES[rule.intent].__name__}")
    return messages


def _find_collisions(ordered: Sequence[GrammarRule]) -> List[Tuple[int, str, str]]:
    collisions = []
    for previous, current in zip(ordered, ordered[1:]):
        if previous.priority == current.priority:
            collisions.append((current.priority, previous.id, current.id))
    return collisions


def rule_from_config(config: Dict[str, Any], priority: int) -> GrammarRule:
    """Build a grammar rule from a config mapping.

    Keys: id, pattern, intent, and optionally category, priority, params,
    value, expected_value, target_text and examples. Param values use the
    '$N' / '#N' reference syntax of parse_param_mapping.
    """
    rule_id = config.get('id')
    pattern = config.get('pattern')
    if not rule_id or not pattern:
        raise GrammarConfigurationError(f"Custom rule needs 'id' and 'pattern': {config!r}")

    try:
        intent = StepIntent(config.get('intent'))
    except ValueError as e:
        raise GrammarConfigurationError(
            f"Custom rule '{rule_id}' has unknown intent {config.get('intent')!r}") from e

    try:
        category = StepCategory(config.get('category', 'action'))
    except ValueError as e:
        raise GrammarConfigurationError(
            f"Custom rule '{rule_id}' has unknown category {config.get('category')!r}") from e

    if not pattern.startswith('^'):
        pattern = '^' + pattern
    if not pattern.endswith('$'):
        pattern = pattern + '$'

    try:
        re.compile(pattern)
    except re.error as e:
        raise GrammarConfigurationError(f"Custom rule '{rule_id}' has an invalid pattern: {e}") from e

    try:
        priority = int(config.get('priority', priority))
    except (TypeError, ValueError) as e:
        raise GrammarConfigurationError(
            f"Custom rule '{rule_id}' has a non-numeric priority {config.get('priority')!r}") from e

    extract = mapped(
        params=parse_param_mapping(config.get('params')),
        value=parse_reference(config.get('value')),
        expected_value=parse_reference(config.get('expected_value')),
        target_text=parse_reference(config.get('target_text', '')),
    )

    return GrammarRule(
        id=rule_id,
        pattern=pattern,
        category=category,
        intent=intent,
        priority=priority,
        extract=extract,
        examples=list(config.get('examples', [])),
    )


def rules_from_config(rule_configs: Optional[Sequence[Dict[str, Any]]]) -> List[GrammarRule]:
    """Custom rules, numbered through the custom band in the order given"""
    rules = []
    for offset, config in enumerate(rule_configs or []):
        priority = CUSTOM_BAND[0] + offset
        if priority > CUSTOM_BAND[1]:
            raise GrammarConfigurationError(
                f"Too many custom rules: the custom band holds {CUSTOM_BAND[1] - CUSTOM_BAND[0] + 1}")
        rules.append(rule_from_config(config, priority))
    return rules


def default_tables() -> List[GrammarTable]:
    """Built-in tables in registration order, structured domains first"""
    from stepgrammar.grammars.navigation_grammars import NAVIGATION_TABLE
    from stepgrammar.grammars.browser_grammars import BROWSER_TABLE
    from stepgrammar.grammars.table_grammars import WEB_TABLE
    from stepgrammar.grammars.data_grammars import DATA_TABLE
    from stepgrammar.grammars.form_grammars import FORM_TABLE
    from stepgrammar.grammars.database_grammars import DATABASE_TABLE
    from stepgrammar.grammars.file_grammars import FILE_TABLE
    from stepgrammar.grammars.comparison_grammars import COMPARISON_TABLE
    from stepgrammar.grammars.context_grammars import CONTEXT_TABLE
    from stepgrammar.grammars.mapping_grammars import MAPPING_TABLE
    from stepgrammar.grammars.orchestration_grammars import ORCHESTRATION_TABLE
    from stepgrammar.grammars.api_grammars import API_TABLE
    from stepgrammar.grammars.assertion_grammars import ASSERTION_TABLE
    from stepgrammar.grammars.action_grammars import ACTION_TABLE
    from stepgrammar.grammars.query_grammars import QUERY_TABLE

    return [
        NAVIGATION_TABLE, BROWSER_TABLE, WEB_TABLE, DATA_TABLE, FORM_TABLE, DATABASE_TABLE,
        FILE_TABLE, COMPARISON_TABLE, CONTEXT_TABLE, MAPPING_TABLE, ORCHESTRATION_TABLE,
        API_TABLE, ASSERTION_TABLE, ACTION_TABLE, QUERY_TABLE,
    ]


def build_default_registry(custom_rules: Optional[Sequence[Dict[str, Any]]] = None,
                           strict: bool = True) -> RuleRegistry:
    """Registry of every built-in table plus optional custom rules from config"""
    tables = default_tables()
    if custom_rules:
        tables.insert(0, GrammarTable('custom', CUSTOM_BAND, rules_from_config(custom_rules)))
    registry = RuleRegistry.from_tables(tables, strict=strict)
    logger.info(f"Loaded {len(registry)} grammar rules")
    return registry


_default_registry: Optional[RuleRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> RuleRegistry:
    """Shared registry of the built-in tables, built once on first use"""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = build_default_registry()
    return _default_registry
