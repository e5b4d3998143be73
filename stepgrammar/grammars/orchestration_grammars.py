"""
Orchestration grammar rules
Invoking project-registered helpers as 'Class.method'
"""
import re
from dataclasses import dataclass

from stepgrammar.grammars.extractors import Q, LiteralRef, mapped
from stepgrammar.grammars.literals import Literals
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent

_CALL = rf'^call\s+helper\s+{Q}'


@dataclass(frozen=True)
class _HelperPart:
    """Class or method half of a helper reference split on its last dot"""
    group: int
    method: bool = False

    def read(self, match: re.Match, literals: Literals) -> str:
        reference = literals.resolve(match, self.group, '')
        owner, dot, name = reference.rpartition('.')
        if not dot:
            return '' if self.method else reference
        return name if self.method else owner


def _helper(**extra) -> dict:
    params = {'helperClass': _HelperPart(1), 'helperMethod': _HelperPart(1, method=True)}
    params.update(extra)
    return params


ORCHESTRATION_RULES = [
    GrammarRule(
        id='orch-call-helper',
        pattern=rf'{_CALL}$',
        category=StepCategory.ACTION,
        intent=StepIntent.CALL_HELPER,
        priority=800,
        extract=mapped(params=_helper()),
        examples=["Call helper 'CredentialManager.getCurrent'", "Call helper 'DataHelper.cleanup'"],
    ),
    GrammarRule(
        id='orch-call-helper-args',
        pattern=rf'{_CALL}\s+with\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.CALL_HELPER,
        priority=801,
        extract=mapped(params=_helper(helperArgs=LiteralRef(2, default='[]'))),
        examples=["""Call helper 'DataHelper.getById' with '["42"]'""",
                  """Call helper 'Utility.transform' with '["input", "output"]'"""],
    ),
    GrammarRule(
        id='orch-call-helper-context',
        pattern=rf'{_CALL}\s+with\s+context\s+args\s+{Q}\s+and\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.CALL_HELPER,
        priority=802,
        extract=mapped(params=_helper(sourceContextVar=LiteralRef(2), targetContextVar=LiteralRef(3))),
        examples=["Call helper 'CompareHelper.validate' with context args 'fileData' and 'dbData'"],
    ),
]

ORCHESTRATION_TABLE = GrammarTable('orchestration', (800, 849), ORCHESTRATION_RULES)
