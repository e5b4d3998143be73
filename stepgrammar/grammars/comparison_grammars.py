"""
Comparison grammar rules
Numeric tolerance checks and comparisons between values held in scenario context
"""
from stepgrammar.grammars.extractors import Q, LiteralRef, mapped
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent

_CONTEXT_FIELD = rf'^verify\s+context\s+{Q}\s+field\s+{Q}\s+'
_CONTEXT_PAIR = rf'^verify\s+context\s+{Q}\s+matches?\s+context\s+{Q}'
_COUNT_OF = rf'^verify\s+count\s+of\s+context\s+{Q}\s+'


def _tolerance(group: int) -> LiteralRef:
    return LiteralRef(group, default=0.0, convert=float)


_PAIR = {'sourceContextVar': LiteralRef(1), 'targetContextVar': LiteralRef(2)}

COMPARISON_RULES = [
    GrammarRule(
        id='cmp-tolerance',
        pattern=rf'^verify\s+{Q}\s+equals?\s+{Q}\s+within\s+tolerance\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_TOLERANCE,
        priority=650,
        extract=mapped(params={'tolerance': _tolerance(3)},
                       value=LiteralRef(1), expected_value=LiteralRef(2)),
        examples=[
            "Verify '100.005' equals '100.00' within tolerance '0.01'",
            "Verify '999.99' equals '1000' within tolerance '0.5'",
        ],
    ),

    # Single context fields
    GrammarRule(
        id='cmp-context-field-is',
        pattern=rf'{_CONTEXT_FIELD}is\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_CONTEXT_FIELD,
        priority=651,
        extract=mapped(params={'sourceContextVar': LiteralRef(1), 'contextField': LiteralRef(2)},
                       expected_value=LiteralRef(3)),
        examples=[
            "Verify context 'recordData' field 'status' is 'ACTIVE'",
            "Verify context 'orderDetails' field 'currency' is 'USD'",
        ],
    ),
    GrammarRule(
        id='cmp-context-field-contains',
        pattern=rf'{_CONTEXT_FIELD}contains?\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_CONTEXT_FIELD,
        priority=652,
        extract=mapped(params={
            'sourceContextVar': LiteralRef(1),
            'contextField': LiteralRef(2),
            'comparisonOp': 'contains',
        }, expected_value=LiteralRef(3)),
        examples=[
            "Verify context 'recordData' field 'description' contains 'approved'",
            "Verify context 'logEntry' field 'message' contains 'success'",
        ],
    ),
    GrammarRule(
        id='cmp-context-field-tolerance',
        pattern=rf'{_CONTEXT_FIELD}equals?\s+{Q}\s+within\s+tolerance\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_CONTEXT_FIELD,
        priority=653,
        extract=mapped(params={
            'sourceContextVar': LiteralRef(1),
            'contextField': LiteralRef(2),
            'tolerance': _tolerance(4),
        }, expected_value=LiteralRef(3)),
        examples=[
            "Verify context 'financialData' field 'balance' equals '1000.50' within tolerance '0.01'",
            "Verify context 'summary' field 'total' equals '500' within tolerance '0.5'",
        ],
    ),
    GrammarRule(
        id='cmp-context-field-not',
        pattern=rf'{_CONTEXT_FIELD}is\s+not\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_CONTEXT_FIELD,
        priority=654,
        extract=mapped(params={
            'sourceContextVar': LiteralRef(1),
            'contextField': LiteralRef(2),
            'comparisonOp': 'not-equals',
        }, expected_value=LiteralRef(3)),
        examples=[
            "Verify context 'recordData' field 'status' is not 'DELETED'",
            "Verify context 'userData' field 'role' is not 'guest'",
        ],
    ),

    # Whole contexts
    GrammarRule(
        id='cmp-context-match',
        pattern=rf'{_CONTEXT_PAIR}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_CONTEXT_MATCH,
        priority=660,
        extract=mapped(params=_PAIR),
        examples=[
            "Verify context 'beforeData' matches context 'afterData'",
            "Verify context 'expectedRecord' matches context 'actualRecord'",
        ],
    ),
    GrammarRule(
        id='cmp-context-match-except',
        pattern=rf'{_CONTEXT_PAIR}\s+except\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_CONTEXT_MATCH,
        priority=661,
        extract=mapped(params=dict(_PAIR, exceptFields=LiteralRef(3))),
        examples=[
            "Verify context 'beforeData' matches context 'afterData' except 'timestamp, modifiedBy'",
            "Verify context 'expected' matches context 'actual' except 'version'",
        ],
    ),
    GrammarRule(
        id='cmp-context-match-tolerance',
        pattern=rf'{_CONTEXT_PAIR}\s+with\s+tolerance\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_CONTEXT_MATCH,
        priority=662,
        extract=mapped(params=dict(_PAIR, tolerance=_tolerance(3))),
        examples=[
            "Verify context 'calculatedTotals' matches context 'expectedTotals' with tolerance '0.01'",
            "Verify context 'dbValues' matches context 'uiValues' with tolerance '0.001'",
        ],
    ),

    # Counts
    GrammarRule(
        id='cmp-count-match',
        pattern=rf'{_COUNT_OF}equals?\s+count\s+of\s+context\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_COUNT_MATCH,
        priority=670,
        extract=mapped(params=_PAIR),
        examples=[
            "Verify count of context 'dbRecords' equals count of context 'uiRows'",
            "Verify count of context 'sourceList' equals count of context 'targetList'",
        ],
    ),
    GrammarRule(
        id='cmp-count-is',
        pattern=rf'{_COUNT_OF}is\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_COUNT_MATCH,
        priority=671,
        extract=mapped(params={'sourceContextVar': LiteralRef(1)}, expected_value=LiteralRef(2)),
        examples=[
            "Verify count of context 'searchResults' is '10'",
            "Verify count of context 'filteredItems' is '0'",
        ],
    ),
    GrammarRule(
        id='cmp-count-gt',
        pattern=rf'{_COUNT_OF}is\s+greater\s+than\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_COUNT_MATCH,
        priority=672,
        extract=mapped(params={'sourceContextVar': LiteralRef(1), 'comparisonOp': 'greater-than'},
                       expected_value=LiteralRef(2)),
        examples=[
            "Verify count of context 'searchResults' is greater than '0'",
            "Verify count of context 'logEntries' is greater than '100'",
        ],
    ),
    GrammarRule(
        id='cmp-count-lt',
        pattern=rf'{_COUNT_OF}is\s+less\s+than\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_COUNT_MATCH,
        priority=673,
        extract=mapped(params={'sourceContextVar': LiteralRef(1), 'comparisonOp': 'less-than'},
                       expected_value=LiteralRef(2)),
        examples=[
            "Verify count of context 'errorList' is less than '10'",
            "Verify count of context 'warningMessages' is less than '5'",
        ],
    ),

    # Row data
    GrammarRule(
        id='cmp-data-match',
        pattern=rf'^verify\s+context\s+{Q}\s+data\s+matches?\s+context\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DATA_MATCH,
        priority=680,
        extract=mapped(params=_PAIR),
        examples=[
            "Verify context 'dbResults' data matches context 'uiTableData'",
            "Verify context 'csvRows' data matches context 'expectedRows'",
        ],
    ),
    GrammarRule(
        id='cmp-data-match-keys',
        pattern=rf'^verify\s+context\s+{Q}\s+data\s+matches?\s+context\s+{Q}\s+using\s+keys?\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DATA_MATCH,
        priority=681,
        extract=mapped(params=dict(_PAIR, keyFields=LiteralRef(3))),
        examples=[
            "Verify context 'dbResults' data matches context 'uiData' using keys 'id, code'",
            "Verify context 'sourceRecords' data matches context 'targetRecords' using key 'recordId'",
        ],
    ),
    GrammarRule(
        id='cmp-data-match-mapping',
        pattern=rf'{_CONTEXT_PAIR}\s+using\s+mapping\s+file\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DATA_MATCH,
        priority=682,
        extract=mapped(params=dict(_PAIR, mappingFile=LiteralRef(3))),
        examples=[
            "Verify context 'dbData' matches context 'uiData' using mapping file 'mappings/field-map.yml'",
            "Verify context 'sourceRecords' matches context 'targetRecords' "
            "using mapping file 'config/comparison.json'",
        ],
    ),

    GrammarRule(
        id='cmp-accumulated',
        pattern=rf'^verify\s+all\s+fields\s+match\s+between\s+context\s+{Q}\s+and\s+{Q}\s+'
                rf'with\s+tolerance\s+{Q}\s+and\s+order-independent\s+fields\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_ACCUMULATED,
        priority=690,
        extract=mapped(params=dict(_PAIR, tolerance=_tolerance(3),
                                   orderIndependentFields=LiteralRef(4))),
        examples=[
            "Verify all fields match between context 'expected' and 'actual' with tolerance '0.01' "
            "and order-independent fields 'tags, categories'",
            "Verify all fields match between context 'dbRecord' and 'uiRecord' with tolerance '0.001' "
            "and order-independent fields 'items'",
        ],
    ),
    GrammarRule(
        id='cmp-order-independent',
        pattern=rf'^verify\s+{Q}\s+matches?\s+{Q}\s+order\s+independent$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_TOLERANCE,
        priority=691,
        extract=mapped(params={'comparisonOp': 'order-independent'},
                       value=LiteralRef(1), expected_value=LiteralRef(2)),
        examples=[
            "Verify 'B, A, C' matches 'A, B, C' order independent",
            "Verify 'red, blue, green' matches 'green, red, blue' order independent",
        ],
    ),
]

COMPARISON_TABLE = GrammarTable('comparison', (650, 699), COMPARISON_RULES)
