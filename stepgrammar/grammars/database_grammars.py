"""
Database grammar rules
Named and file-based queries, single values, rows, counts, record and field
assertions, updates and resolve-or-use lookups. Every rule refers to a
database by its configured alias and to a query by its configured name.
"""
from typing import Any, Dict, Optional

from stepgrammar.grammars.extractors import OPT_PARAMS, Q, LiteralRef, mapped
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent

_VERIFY = r'^verify\s+(?:that\s+)?database'


def _alias_query(alias: int, query: int, params: Optional[int] = None, **extra) -> Dict[str, Any]:
    """dbAlias/dbQuery mapping, with dbParams when the optional clause is present"""
    mapping: Dict[str, Any] = {'dbAlias': LiteralRef(alias), 'dbQuery': LiteralRef(query)}
    if params is not None:
        mapping['dbParams'] = LiteralRef(params, optional=True)
    mapping.update(extra)
    return mapping


DATABASE_RULES = [
    # Named queries
    GrammarRule(
        id='db-query-named',
        pattern=rf'^query\s+database\s+{Q}\s+with\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.DB_QUERY,
        priority=550,
        extract=mapped(params=_alias_query(1, 2)),
        examples=[
            "Query database 'PRIMARY_DB' with 'FETCH_ACTIVE_RECORDS'",
            "Query database 'STAGING_DB' with 'GET_ALL_ITEMS'",
        ],
    ),
    GrammarRule(
        id='db-query-named-params',
        pattern=rf'^query\s+database\s+{Q}\s+with\s+{Q}\s+params\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.DB_QUERY,
        priority=551,
        extract=mapped(params=_alias_query(1, 2, dbParams=LiteralRef(3, default='[]'))),
        examples=[
            """Query database 'PRIMARY_DB' with 'GET_BY_CODE' params '["A100"]'""",
            "Query database 'STAGING_DB' with 'GET_BY_ID' params '[42]'",
        ],
    ),
    GrammarRule(
        id='db-query-file',
        pattern=rf'^query\s+database\s+{Q}\s+from\s+file\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.DB_QUERY_FILE,
        priority=552,
        extract=mapped(params={'dbAlias': LiteralRef(1), 'dbFile': LiteralRef(2)}),
        examples=["Query database 'PRIMARY_DB' from file 'queries/fetch-items.sql'"],
    ),
    GrammarRule(
        id='db-query-file-params',
        pattern=rf'^query\s+database\s+{Q}\s+from\s+file\s+{Q}\s+params\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.DB_QUERY_FILE,
        priority=553,
        extract=mapped(params={
            'dbAlias': LiteralRef(1),
            'dbFile': LiteralRef(2),
            'dbParams': LiteralRef(3, default='[]'),
        }),
        examples=["Query database 'PRIMARY_DB' from file 'queries/get-by-id.sql' params '[42]'"],
    ),

    # Reads
    GrammarRule(
        id='db-get-value',
        pattern=rf'^get\s+database\s+value\s+from\s+{Q}\s+query\s+{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_DB_VALUE,
        priority=560,
        extract=mapped(params=_alias_query(1, 2)),
        examples=["Get database value from 'PRIMARY_DB' query 'GET_CURRENT_COUNT'"],
    ),
    GrammarRule(
        id='db-get-value-params',
        pattern=rf'^get\s+database\s+value\s+from\s+{Q}\s+query\s+{Q}\s+params\s+{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_DB_VALUE,
        priority=561,
        extract=mapped(params=_alias_query(1, 2, dbParams=LiteralRef(3, default='[]'))),
        examples=["""Get database value from 'PRIMARY_DB' query 'GET_STATUS' params '["A100"]'"""],
    ),
    GrammarRule(
        id='db-get-row',
        pattern=rf'^get\s+database\s+row\s+from\s+{Q}\s+query\s+{Q}{OPT_PARAMS}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_DB_ROW,
        priority=562,
        extract=mapped(params=_alias_query(1, 2, 3)),
        examples=[
            """Get database row from 'PRIMARY_DB' query 'GET_ITEM_DETAILS' params '["42"]'""",
            "Get database row from 'PRIMARY_DB' query 'GET_FIRST_ACTIVE'",
        ],
    ),
    GrammarRule(
        id='db-get-rows',
        pattern=rf'^get\s+database\s+rows\s+from\s+{Q}\s+query\s+{Q}{OPT_PARAMS}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_DB_ROWS,
        priority=563,
        extract=mapped(params=_alias_query(1, 2, 3)),
        examples=[
            "Get database rows from 'PRIMARY_DB' query 'FETCH_ALL_ACTIVE'",
            """Get database rows from 'PRIMARY_DB' query 'GET_BY_STATUS' params '["ACTIVE"]'""",
        ],
    ),
    GrammarRule(
        id='db-get-count',
        pattern=rf'^get\s+database\s+count\s+from\s+{Q}\s+query\s+{Q}{OPT_PARAMS}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_DB_COUNT,
        priority=564,
        extract=mapped(params=_alias_query(1, 2, 3)),
        examples=[
            "Get database count from 'PRIMARY_DB' query 'COUNT_ACTIVE_ITEMS'",
            """Get database count from 'PRIMARY_DB' query 'COUNT_BY_STATUS' params '["ACTIVE"]'""",
        ],
    ),

    # Assertions
    GrammarRule(
        id='db-verify-exists',
        pattern=rf'{_VERIFY}\s+record\s+exists\s+in\s+{Q}\s+query\s+{Q}{OPT_PARAMS}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DB_EXISTS,
        priority=570,
        extract=mapped(params=_alias_query(1, 2, 3)),
        examples=[
            """Verify database record exists in 'PRIMARY_DB' query 'CHECK_EXISTS' params '["A100"]'""",
            "Verify that database record exists in 'PRIMARY_DB' query 'CHECK_ITEM'",
        ],
    ),
    GrammarRule(
        id='db-verify-not-exists',
        pattern=rf'{_VERIFY}\s+record\s+does\s+not\s+exist\s+in\s+{Q}\s+query\s+{Q}{OPT_PARAMS}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DB_NOT_EXISTS,
        priority=571,
        extract=mapped(params=_alias_query(1, 2, 3)),
        examples=[
            """Verify database record does not exist in 'PRIMARY_DB' query 'CHECK_EXISTS' params '["DELETED_01"]'""",
            "Verify database record does not exist in 'PRIMARY_DB' query 'CHECK_PURGED'",
        ],
    ),
    GrammarRule(
        id='db-verify-field',
        pattern=rf'{_VERIFY}\s+field\s+{Q}\s+(?:is|equals?)\s+{Q}\s+in\s+{Q}\s+query\s+{Q}{OPT_PARAMS}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DB_FIELD,
        priority=572,
        extract=mapped(
            params=_alias_query(3, 4, 5, dbField=LiteralRef(1), comparisonOp='equals'),
            expected_value=LiteralRef(2),
        ),
        examples=[
            """Verify database field 'status' is 'ACTIVE' in 'PRIMARY_DB' query 'GET_RECORD' params '["42"]'""",
            "Verify database field 'name' equals 'Test Item' in 'PRIMARY_DB' query 'GET_ITEM'",
        ],
    ),
    GrammarRule(
        id='db-verify-field-tolerance',
        pattern=rf'{_VERIFY}\s+field\s+{Q}\s+equals?\s+{Q}\s+within\s+tolerance\s+{Q}\s+'
                rf'in\s+{Q}\s+query\s+{Q}{OPT_PARAMS}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DB_FIELD,
        priority=573,
        extract=mapped(
            params=_alias_query(4, 5, 6, dbField=LiteralRef(1),
                                tolerance=LiteralRef(3, default=0.0, convert=float),
                                comparisonOp='equals'),
            expected_value=LiteralRef(2),
        ),
        examples=[
            "Verify database field 'amount' equals '100.50' within tolerance '0.01' "
            "in 'PRIMARY_DB' query 'GET_TOTAL'",
            "Verify database field 'amount' equals '99.90' within tolerance '0.05' "
            "in 'PRIMARY_DB' query 'GET_TOTAL_BY_ID' params '[7]'",
        ],
    ),
    GrammarRule(
        id='db-verify-field-contains',
        pattern=rf'{_VERIFY}\s+field\s+{Q}\s+contains?\s+{Q}\s+in\s+{Q}\s+query\s+{Q}{OPT_PARAMS}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DB_FIELD,
        priority=574,
        extract=mapped(
            params=_alias_query(3, 4, 5, dbField=LiteralRef(1), comparisonOp='contains'),
            expected_value=LiteralRef(2),
        ),
        examples=[
            "Verify database field 'description' contains 'approved' in 'PRIMARY_DB' query 'GET_DETAILS'",
            "Verify database field 'notes' contains 'urgent' in 'PRIMARY_DB' query 'GET_NOTES' params '[3]'",
        ],
    ),
    GrammarRule(
        id='db-verify-count-equals',
        pattern=rf'{_VERIFY}\s+count\s+(?:is|equals?)\s+{Q}\s+in\s+{Q}\s+query\s+{Q}{OPT_PARAMS}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DB_COUNT,
        priority=575,
        extract=mapped(params=_alias_query(2, 3, 4, comparisonOp='equals'),
                       expected_value=LiteralRef(1)),
        examples=[
            """Verify database count is '5' in 'PRIMARY_DB' query 'COUNT_ITEMS' params '["ACTIVE"]'""",
            "Verify database count equals '10' in 'PRIMARY_DB' query 'COUNT_ALL'",
        ],
    ),
    GrammarRule(
        id='db-verify-count-gt',
        pattern=rf'{_VERIFY}\s+count\s+is\s+greater\s+than\s+{Q}\s+in\s+{Q}\s+query\s+{Q}{OPT_PARAMS}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DB_COUNT,
        priority=576,
        extract=mapped(params=_alias_query(2, 3, 4, comparisonOp='greater-than'),
                       expected_value=LiteralRef(1)),
        examples=[
            "Verify database count is greater than '0' in 'PRIMARY_DB' query 'COUNT_ITEMS'",
            """Verify database count is greater than '2' in 'PRIMARY_DB' query 'COUNT_BY_TYPE' params '["X"]'""",
        ],
    ),

    # Writes and lookups
    GrammarRule(
        id='db-update',
        pattern=rf'^execute\s+database\s+update\s+in\s+{Q}\s+query\s+{Q}{OPT_PARAMS}$',
        category=StepCategory.ACTION,
        intent=StepIntent.DB_UPDATE,
        priority=580,
        extract=mapped(params=_alias_query(1, 2, 3)),
        examples=[
            """Execute database update in 'PRIMARY_DB' query 'MARK_INACTIVE' params '["A100"]'""",
            "Execute database update in 'PRIMARY_DB' query 'CLEANUP_TEST_DATA'",
        ],
    ),
    GrammarRule(
        id='db-resolve-or-use',
        pattern=rf'^resolve\s+{Q}\s+from\s+database\s+{Q}\s+query\s+{Q}\s+if\s+not\s+provided\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.DB_RESOLVE_OR_USE,
        priority=590,
        extract=mapped(params=_alias_query(2, 3, variableName=LiteralRef(1)), value=LiteralRef(4)),
        examples=[
            "Resolve 'itemCode' from database 'PRIMARY_DB' query 'GET_RANDOM_ACTIVE' "
            "if not provided '{scenario:inputCode}'",
        ],
    ),
    GrammarRule(
        id='db-resolve-field-or-use',
        pattern=rf'^resolve\s+{Q}\s+field\s+{Q}\s+from\s+database\s+{Q}\s+query\s+{Q}'
                rf'\s+if\s+not\s+provided\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.DB_RESOLVE_OR_USE,
        priority=591,
        extract=mapped(
            params=_alias_query(3, 4, variableName=LiteralRef(1), dbField=LiteralRef(2)),
            value=LiteralRef(5),
        ),
        examples=[
            "Resolve 'itemName' field 'name' from database 'PRIMARY_DB' query 'GET_DETAILS' "
            "if not provided '{scenario:inputName}'",
        ],
    ),
]

DATABASE_TABLE = GrammarTable('database', (550, 599), DATABASE_RULES)
