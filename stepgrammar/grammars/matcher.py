"""
Rule matcher
First-match search over the priority-ordered registry
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from stepgrammar.grammars.literals import Literals
from stepgrammar.grammars.registry import RuleRegistry
from stepgrammar.grammars.types import ExtractionResult, GrammarRule
from stepgrammar.utils.helpers import truncate
from stepgrammar.utils.logger import setup_logger

logger = setup_logger(__name__)


class MatchStatus(Enum):
    MATCHED = "matched"
    UNMATCHED = "unmatched"
    EXTRACTION_FAILED = "extraction_failed"


@dataclass
class MatchOutcome:
    """Result of one match attempt; no-match is a value, not an exception"""
    status: MatchStatus
    rule: Optional[GrammarRule] = None
    extraction: Optional[ExtractionResult] = None
    error: Optional[str] = None
    unresolved: Sequence[str] = ()

    @property
    def matched(self) -> bool:
        return self.status is MatchStatus.MATCHED

    @property
    def rule_id(self) -> Optional[str]:
        return self.rule.id if self.rule else None


class RuleMatcher:
    """Finds the first rule, in priority order, whose pattern matches a whole sentence"""

    def __init__(self, registry: RuleRegistry):
        self.registry = registry

    def match(self, normalized: str, literals: Sequence[str] = ()) -> MatchOutcome:
        """Match a placeholder-normalized sentence.

        The first matching rule wins. When its extractor raises, the failure
        is reported for that rule and later rules are not tried.
        """
        for rule in self.registry.rules:
            match = rule.match(normalized)
            if match is None:
                continue

            resolver = Literals(literals)
            try:
                extraction = rule.extract(match, resolver)
            except Exception as e:
                logger.error(f"Rule '{rule.id}' failed to extract from "
                             f"'{truncate(normalized)}': {e}")
                return MatchOutcome(MatchStatus.EXTRACTION_FAILED, rule=rule, error=str(e))

            if resolver.unresolved:
                logger.warning(f"Rule '{rule.id}' has unresolved literal references: "
                               f"{', '.join(resolver.unresolved)}")

            logger.debug(f"Matched rule '{rule.id}' ({rule.intent.value})")
            return MatchOutcome(MatchStatus.MATCHED, rule=rule, extraction=extraction,
                                unresolved=tuple(resolver.unresolved))

        logger.debug(f"No rule matched: '{truncate(normalized)}'")
        return MatchOutcome(MatchStatus.UNMATCHED)

    def candidates(self, normalized: str) -> List[str]:
        """Every rule id whose pattern matches, in priority order"""
        return [rule.id for rule in self.registry.rules if rule.match(normalized) is not None]
