"""UI query grammar rules: reading text, values, attributes, counts, the URL and the title"""
from stepgrammar.grammars.extractors import Q, LiteralRef, mapped, ui_extract
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent

_GET = r'^(?:get|read|extract|fetch|retrieve|capture|grab)\s+(?:the\s+)?'

QUERY_RULES = [
    GrammarRule(
        id='query-get-url',
        pattern=r'^(?:get|read|extract)\s+(?:the\s+)?(?:current\s+)?(?:page\s+)?url$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_URL,
        priority=1200,
        extract=mapped(),
        examples=['Get the current URL', 'Get the page url', 'Read the URL'],
    ),
    GrammarRule(
        id='query-get-title',
        pattern=r'^(?:get|read|extract)\s+(?:the\s+)?(?:page\s+)?title$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_TITLE,
        priority=1201,
        extract=mapped(),
        examples=['Get the page title', 'Read the title'],
    ),
    GrammarRule(
        id='query-get-url-param',
        pattern=rf'^(?:get|read|extract)\s+(?:the\s+)?(?:value\s+of\s+)?(?:the\s+)?url\s+'
                rf'(?:param|parameter|query\s+param)\s+{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_URL_PARAM,
        priority=1202,
        extract=mapped(params={'urlParam': LiteralRef(1)}),
        examples=["Get the URL parameter 'id'", "Read the value of URL param 'page'",
                  "Extract the URL query param 'token'"],
    ),

    # Attributes
    GrammarRule(
        id='query-get-attribute',
        pattern=rf'{_GET}(?:attribute\s+)?{Q}\s+(?:attribute\s+)?(?:from|of)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_ATTRIBUTE,
        priority=1205,
        extract=ui_extract(2, params={'attribute': LiteralRef(1)}),
        examples=["Get the 'href' attribute from the Home link", "Get attribute 'src' of the logo image"],
    ),
    GrammarRule(
        id='query-get-attribute-of',
        pattern=rf'{_GET}(.+?)\s+attribute\s+{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_ATTRIBUTE,
        priority=1206,
        extract=ui_extract(1, params={'attribute': LiteralRef(2)}),
        examples=["Get the link attribute 'href'"],
    ),

    # Text and values
    GrammarRule(
        id='query-get-text-from',
        pattern=rf'{_GET}(?:text|content|label)\s+(?:from|of)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_TEXT,
        priority=1210,
        extract=ui_extract(1),
        examples=['Get the text from the Welcome heading', 'Read the content of the status message',
                  'Capture the label of the Total field'],
    ),
    GrammarRule(
        id='query-get-value-from',
        pattern=rf'{_GET}value\s+(?:from|of)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_VALUE,
        priority=1211,
        extract=ui_extract(1, element_type='input'),
        examples=['Get the value from the Quantity field', 'Read the value of the Email input'],
    ),
    GrammarRule(
        id='query-get-count',
        pattern=r'^(?:get|count|read)\s+(?:the\s+)?(?:number\s+of|count\s+of|total)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_COUNT,
        priority=1212,
        extract=ui_extract(1),
        examples=['Get the number of items in the cart', 'Count the number of list items',
                  'Get the count of notifications'],
    ),
    GrammarRule(
        id='query-how-many',
        pattern=r'^how\s+many\s+(.+?)\s+(?:are\s+there|exist|are\s+(?:visible|displayed|shown|present))\??$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_COUNT,
        priority=1213,
        extract=ui_extract(1),
        examples=['How many rows are there?', 'How many error messages are displayed'],
    ),
    GrammarRule(
        id='query-get-list',
        pattern=r'^(?:get|read|extract|list)\s+(?:all\s+)?(?:the\s+)?(?:text|values?|items?|options?)\s+'
                r'(?:from|of|in)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_LIST,
        priority=1214,
        extract=ui_extract(1),
        examples=['Get all options from the Country dropdown', 'List the items in the cart',
                  'Get all values from the Tags list'],
    ),
    GrammarRule(
        id='query-get-text-of',
        pattern=rf"{_GET}(.+?)(?:'s)?\s+text$",
        category=StepCategory.QUERY,
        intent=StepIntent.GET_TEXT,
        priority=1215,
        extract=ui_extract(1),
        examples=['Get the heading text', "Read the error message's text"],
    ),
]

QUERY_TABLE = GrammarTable('query', (1200, 1249), QUERY_RULES)
