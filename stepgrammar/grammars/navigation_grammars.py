"""Navigation grammar rules: go to a URL or path, back, forward, reload"""
from stepgrammar.grammars.extractors import Q, GroupRef, LiteralRef, mapped
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent

_VERB = r'(?:navigate|go|open|visit|browse)'

NAVIGATION_RULES = [
    GrammarRule(
        id='nav-goto-url-quoted',
        pattern=rf'^{_VERB}\s+(?:to\s+)?{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.NAVIGATE,
        priority=300,
        extract=mapped(params={'url': LiteralRef(1)}),
        examples=[
            "Navigate to 'https://example.com'",
            "Go to '/dashboard'",
            "Open 'https://app.example.com/login'",
        ],
    ),
    GrammarRule(
        id='nav-goto-url-unquoted',
        pattern=rf'^{_VERB}\s+to\s+(https?://\S+)$',
        category=StepCategory.ACTION,
        intent=StepIntent.NAVIGATE,
        priority=301,
        extract=mapped(params={'url': GroupRef(1)}),
        examples=['Navigate to https://example.com', 'Go to https://app.example.com/login'],
    ),
    GrammarRule(
        id='nav-goto-path',
        pattern=rf'^{_VERB}\s+to\s+(/\S+)$',
        category=StepCategory.ACTION,
        intent=StepIntent.NAVIGATE,
        priority=302,
        extract=mapped(params={'url': GroupRef(1)}),
        examples=['Navigate to /dashboard', 'Go to /settings/profile'],
    ),
    GrammarRule(
        id='nav-go-back',
        pattern=r'^(?:go|navigate)\s+back$',
        category=StepCategory.ACTION,
        intent=StepIntent.NAVIGATE,
        priority=310,
        extract=mapped(params={'navigationAction': 'back'}),
        examples=['Go back', 'Navigate back'],
    ),
    GrammarRule(
        id='nav-go-forward',
        pattern=r'^(?:go|navigate)\s+forward$',
        category=StepCategory.ACTION,
        intent=StepIntent.NAVIGATE,
        priority=311,
        extract=mapped(params={'navigationAction': 'forward'}),
        examples=['Go forward', 'Navigate forward'],
    ),
    GrammarRule(
        id='nav-reload',
        pattern=r'^(?:reload|refresh)(?:\s+(?:the\s+)?page)?$',
        category=StepCategory.ACTION,
        intent=StepIntent.NAVIGATE,
        priority=312,
        extract=mapped(params={'navigationAction': 'reload'}),
        examples=['Reload the page', 'Refresh', 'Reload'],
    ),
]

NAVIGATION_TABLE = GrammarTable('navigation', (300, 349), NAVIGATION_RULES)
