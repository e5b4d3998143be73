"""
Context grammar rules
Reading, copying and writing scenario context variables, plus the generators
that store derived values such as business dates and formatted numbers
"""
from stepgrammar.grammars.extractors import Q, LiteralRef, mapped
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent

CONTEXT_RULES = [
    # Reads
    GrammarRule(
        id='ctx-get-field',
        pattern=rf'^get\s+field\s+{Q}\s+from\s+context\s+{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_CONTEXT_FIELD,
        priority=700,
        extract=mapped(params={'contextField': LiteralRef(1), 'sourceContextVar': LiteralRef(2)}),
        examples=["Get field 'status' from context 'recordData'",
                  "Get field 'name' from context 'currentItem'"],
    ),
    GrammarRule(
        id='ctx-get-field-index',
        pattern=rf'^get\s+field\s+{Q}\s+from\s+row\s+{Q}\s+of\s+context\s+{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_CONTEXT_FIELD,
        priority=701,
        extract=mapped(params={
            'contextField': LiteralRef(1),
            'contextRowIndex': LiteralRef(2, default=0, convert=int),
            'sourceContextVar': LiteralRef(3),
        }),
        examples=["Get field 'name' from row '2' of context 'allRecords'",
                  "Get field 'code' from row '0' of context 'dbResults'"],
    ),
    GrammarRule(
        id='ctx-get-count',
        pattern=rf'^get\s+count\s+of\s+context\s+{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_CONTEXT_COUNT,
        priority=702,
        extract=mapped(params={'sourceContextVar': LiteralRef(1)}),
        examples=["Get count of context 'searchResults'", "Get count of context 'dbRecords'"],
    ),
    GrammarRule(
        id='ctx-get-keys',
        pattern=rf'^get\s+keys\s+from\s+context\s+{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_CONTEXT_KEYS,
        priority=703,
        extract=mapped(params={'sourceContextVar': LiteralRef(1)}),
        examples=["Get keys from context 'recordData'", "Get keys from context 'formData'"],
    ),

    # Writes
    GrammarRule(
        id='ctx-copy-var',
        pattern=rf'^copy\s+context\s+{Q}\s+to\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.COPY_CONTEXT_VAR,
        priority=710,
        extract=mapped(params={'sourceContextVar': LiteralRef(1), 'targetContextVar': LiteralRef(2)}),
        examples=["Copy context 'originalRecord' to 'backupRecord'"],
    ),
    GrammarRule(
        id='ctx-set-same-as',
        pattern=rf'^set\s+context\s+{Q}\s+same\s+as\s+context\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.COPY_CONTEXT_VAR,
        priority=711,
        extract=mapped(params={'targetContextVar': LiteralRef(1), 'sourceContextVar': LiteralRef(2)}),
        examples=["Set context 'endValue' same as context 'startValue'"],
    ),
    GrammarRule(
        id='ctx-set-field',
        pattern=rf'^set\s+field\s+{Q}\s+in\s+context\s+{Q}\s+to\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.SET_CONTEXT_FIELD,
        priority=712,
        extract=mapped(params={'contextField': LiteralRef(1), 'sourceContextVar': LiteralRef(2)},
                       value=LiteralRef(3)),
        examples=["Set field 'status' in context 'recordData' to 'INACTIVE'"],
    ),
    GrammarRule(
        id='ctx-clear-var',
        pattern=rf'^clear\s+context\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.CLEAR_CONTEXT_VAR,
        priority=713,
        extract=mapped(params={'sourceContextVar': LiteralRef(1)}),
        examples=["Clear context 'tempData'"],
    ),

    # Generated values
    GrammarRule(
        id='ctx-generate-decimal',
        pattern=rf'^generate\s+random\s+decimal\s+between\s+{Q}\s+and\s+{Q}\s+with\s+{Q}\s+decimal\s+places?$',
        category=StepCategory.QUERY,
        intent=StepIntent.GENERATE_DATA,
        priority=720,
        extract=mapped(params={
            'dataType': 'random-decimal',
            'rangeMin': LiteralRef(1, default=0.0, convert=float),
            'rangeMax': LiteralRef(2, default=100.0, convert=float),
            'decimalPlaces': LiteralRef(3, default=2, convert=int),
        }),
        examples=["Generate random decimal between '0.01' and '99.99' with '2' decimal places"],
    ),
    GrammarRule(
        id='ctx-generate-formatted-number',
        pattern=rf'^generate\s+random\s+number\s+in\s+format\s+{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GENERATE_DATA,
        priority=721,
        extract=mapped(params={'dataType': 'formatted-number', 'numberFormat': LiteralRef(1)}),
        examples=["Generate random number in format 'x.0yy'"],
    ),
    GrammarRule(
        id='ctx-generate-date-past',
        pattern=rf'^generate\s+date\s+{Q}\s+business\s+days?\s+ago$',
        category=StepCategory.QUERY,
        intent=StepIntent.GENERATE_DATA,
        priority=722,
        extract=mapped(params={
            'dataType': 'business-days-ago',
            'businessDaysOffset': LiteralRef(1, default=1, convert=int),
        }),
        examples=["Generate date '3' business days ago", "Generate date '1' business day ago"],
    ),
    GrammarRule(
        id='ctx-generate-date-future',
        pattern=rf'^generate\s+date\s+{Q}\s+business\s+days?\s+from\s+now$',
        category=StepCategory.QUERY,
        intent=StepIntent.GENERATE_DATA,
        priority=723,
        extract=mapped(params={
            'dataType': 'business-days-from-now',
            'businessDaysOffset': LiteralRef(1, default=1, convert=int),
        }),
        examples=["Generate date '5' business days from now", "Generate date '1' business day from now"],
    ),
    GrammarRule(
        id='ctx-generate-date-format',
        pattern=rf'^generate\s+current\s+date\s+in\s+format\s+{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GENERATE_DATA,
        priority=724,
        extract=mapped(params={'dataType': 'formatted-date', 'dateFormat': LiteralRef(1)}),
        examples=["Generate current date in format 'MM/DD/YYYY'",
                  "Generate current date in format 'YYYY-MM-DD'"],
    ),

    # Derived values
    GrammarRule(
        id='ctx-concat',
        pattern=rf'^concatenate\s+context\s+{Q}\s+and\s+context\s+{Q}\s+with\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.SET_CONTEXT_FIELD,
        priority=730,
        extract=mapped(params={
            'sourceContextVar': LiteralRef(1),
            'targetContextVar': LiteralRef(2),
            'separator': LiteralRef(3),
            'comparisonOp': 'concatenate',
        }),
        examples=["Concatenate context 'firstName' and context 'lastName' with ' '"],
    ),
    GrammarRule(
        id='ctx-format-date',
        pattern=rf'^format\s+context\s+{Q}\s+as\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.SET_CONTEXT_FIELD,
        priority=731,
        extract=mapped(params={
            'sourceContextVar': LiteralRef(1),
            'dateFormat': LiteralRef(2),
            'comparisonOp': 'format-date',
        }),
        examples=["Format context 'rawDate' as 'MM/DD/YYYY'", "Format context 'timestamp' as 'YYYY-MM-DD'"],
    ),
]

CONTEXT_TABLE = GrammarTable('context', (700, 749), CONTEXT_RULES)
