"""
Web table grammar rules
Reading table data, cells, columns and row counts, verifying cells, expanding
rows, interacting with controls inside cells and checking column sort order.
"""
from stepgrammar.grammars.extractors import Q, GroupRef, LiteralRef, mapped, ui_extract
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent

_OF = r'\s+(?:of|in|from)\s+(?:the\s+)?(.+?)$'
_CELL = rf'row\s+{Q}\s+column\s+{Q}\s+(?:of|in)\s+(?:the\s+)?(.+?)$'
_COLUMN = rf'^verify\s+(?:that\s+)?column\s+{Q}\s+'


def _quoted_row(group: int) -> LiteralRef:
    return LiteralRef(group, default=1, convert=int)


def _cell(row_group: int, column_group: int, cell_type: str) -> dict:
    return {'rowIndex': _quoted_row(row_group), 'columnRef': LiteralRef(column_group),
            'cellElementType': cell_type}


def _sorted(direction: str, data_type: str = 'string') -> dict:
    return {'columnRef': LiteralRef(1), 'sortDirection': direction, 'sortDataType': data_type}


WEB_TABLE_RULES = [
    # Whole-table capture
    GrammarRule(
        id='table-get-all-data',
        pattern=r'^(?:get|capture|extract|read)\s+(?:all\s+)?(?:the\s+)?(?:data|content|rows)\s+from\s+(?:the\s+)?(.+?)$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_TABLE_DATA,
        priority=400,
        extract=ui_extract(1, element_type='table'),
        examples=['Get all data from the results table', 'Capture the data from the users table',
                  'Extract all rows from the table'],
    ),
    GrammarRule(
        id='table-capture-data',
        pattern=r'^capture\s+(?:the\s+)?table\s+(?:data|content)$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_TABLE_DATA,
        priority=401,
        extract=mapped(element_type='table'),
        examples=['Capture the table data', 'Capture table content'],
    ),

    # Cells
    GrammarRule(
        id='table-get-cell-by-index',
        pattern=rf'^(?:get|read)\s+(?:the\s+)?value\s+from\s+row\s+(\d+)\s+column\s+(\d+){_OF}',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_TABLE_CELL,
        priority=405,
        extract=ui_extract(3, params={'rowIndex': GroupRef(1, convert=int), 'columnRef': GroupRef(2)},
                           element_type='table'),
        examples=['Get the value from row 2 column 3 of the table',
                  'Read the value from row 1 column 1 of the results table'],
    ),
    GrammarRule(
        id='table-get-cell-by-header',
        pattern=rf'^(?:get|read)\s+(?:the\s+)?value\s+from\s+row\s+(\d+)\s+column\s+{Q}{_OF}',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_TABLE_CELL,
        priority=406,
        extract=ui_extract(3, params={'rowIndex': GroupRef(1, convert=int), 'columnRef': LiteralRef(2)},
                           element_type='table'),
        examples=["Get the value from row 2 column 'Price' of the table",
                  "Read the value from row 1 column 'Status' of the results table"],
    ),

    # Columns
    GrammarRule(
        id='table-get-column-by-header',
        pattern=rf'^(?:get|read|extract)\s+(?:all\s+)?(?:the\s+)?values?\s+from\s+column\s+{Q}{_OF}',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_TABLE_COLUMN,
        priority=410,
        extract=ui_extract(2, params={'columnRef': LiteralRef(1)}, element_type='table'),
        examples=["Get all values from column 'Name' in the table",
                  "Extract values from column 'Status' of the users table"],
    ),
    GrammarRule(
        id='table-get-column-by-index',
        pattern=rf'^(?:get|read|extract)\s+(?:all\s+)?(?:the\s+)?values?\s+from\s+column\s+(\d+){_OF}',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_TABLE_COLUMN,
        priority=411,
        extract=ui_extract(2, params={'columnRef': GroupRef(1)}, element_type='table'),
        examples=['Get all values from column 3 in the table',
                  'Read values from column 1 of the results table'],
    ),

    # Row count
    GrammarRule(
        id='table-get-row-count',
        pattern=r'^(?:get|count|read)\s+(?:the\s+)?(?:number\s+of\s+)?rows\s+(?:in|of|from)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_TABLE_ROW_COUNT,
        priority=415,
        extract=ui_extract(1, element_type='table'),
        examples=['Get the number of rows in the table', 'Count rows in the results table',
                  'Get rows of the users table'],
    ),

    # Cell verification
    GrammarRule(
        id='table-verify-cell-by-header',
        pattern=(rf'^(?:verify|assert|check)\s+(?:that\s+)?row\s+(\d+)\s+column\s+{Q}\s+(?:of|in|from)\s+'
                 rf'(?:the\s+)?(.+?)\s+(?:is|equals?)\s+{Q}$'),
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_TABLE_CELL,
        priority=420,
        extract=ui_extract(3, params={'rowIndex': GroupRef(1, convert=int), 'columnRef': LiteralRef(2)},
                           expected_value=LiteralRef(4), element_type='table'),
        examples=["Verify row 2 column 'Status' of the table is 'Active'",
                  "Assert row 1 column 'Name' in the results table equals 'John'"],
    ),
    GrammarRule(
        id='table-verify-cell-by-index',
        pattern=(r'^(?:verify|assert|check)\s+(?:that\s+)?row\s+(\d+)\s+column\s+(\d+)\s+(?:of|in|from)\s+'
                 rf'(?:the\s+)?(.+?)\s+(?:is|equals?)\s+{Q}$'),
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_TABLE_CELL,
        priority=421,
        extract=ui_extract(3, params={'rowIndex': GroupRef(1, convert=int), 'columnRef': GroupRef(2)},
                           expected_value=LiteralRef(4), element_type='table'),
        examples=["Verify row 1 column 2 of the table is 'Active'",
                  "Check row 3 column 1 in the results table equals 'USD'"],
    ),

    # Expandable rows
    GrammarRule(
        id='table-expand-row',
        pattern=rf'^expand\s+row\s+{Q}\s+(?:in|of)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.EXPAND_ROW,
        priority=425,
        extract=ui_extract(2, params={'rowIndex': _quoted_row(1), 'expandAction': 'expand'},
                           element_type='table'),
        examples=["Expand row '1' in the table", "Expand row '3' of the results table"],
    ),
    GrammarRule(
        id='table-expand-row-by-text',
        pattern=rf'^expand\s+(?:the\s+)?row\s+containing\s+{Q}\s+(?:in|of)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.EXPAND_ROW,
        priority=426,
        extract=ui_extract(2, params={'expandAction': 'expand'}, value=LiteralRef(1), element_type='table'),
        examples=["Expand the row containing 'A100' in the table",
                  "Expand the row containing 'Pending' in the results table"],
    ),
    GrammarRule(
        id='table-collapse-row',
        pattern=rf'^collapse\s+row\s+{Q}\s+(?:in|of)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.COLLAPSE_ROW,
        priority=427,
        extract=ui_extract(2, params={'rowIndex': _quoted_row(1), 'expandAction': 'collapse'},
                           element_type='table'),
        examples=["Collapse row '1' in the table", "Collapse row '2' of the results table"],
    ),

    # Controls inside cells
    GrammarRule(
        id='table-click-cell-link',
        pattern=rf'^click\s+(?:the\s+)?link\s+in\s+{_CELL}',
        category=StepCategory.ACTION,
        intent=StepIntent.CLICK,
        priority=430,
        extract=ui_extract(3, params=_cell(1, 2, 'link'), element_type='table'),
        examples=["Click the link in row '1' column 'Name' of the table",
                  "Click the link in row '2' column 'Details' in the results table"],
    ),
    GrammarRule(
        id='table-check-cell-checkbox',
        pattern=rf'^check\s+(?:the\s+)?checkbox\s+in\s+{_CELL}',
        category=StepCategory.ACTION,
        intent=StepIntent.CHECK,
        priority=431,
        extract=ui_extract(3, params=_cell(1, 2, 'checkbox'), element_type='table'),
        examples=["Check the checkbox in row '2' column 'Select' of the table",
                  "Check the checkbox in row '1' column 'Active' in the results table"],
    ),
    GrammarRule(
        id='table-select-cell-dropdown',
        pattern=rf'^select\s+{Q}\s+from\s+(?:the\s+)?dropdown\s+in\s+{_CELL}',
        category=StepCategory.ACTION,
        intent=StepIntent.SELECT,
        priority=432,
        extract=ui_extract(4, params=_cell(2, 3, 'dropdown'), value=LiteralRef(1), element_type='table'),
        examples=["Select 'Approved' from the dropdown in row '1' column 'Status' of the table"],
    ),
    GrammarRule(
        id='table-get-cell-checkbox-state',
        pattern=rf'^get\s+(?:the\s+)?checkbox\s+state\s+from\s+{_CELL}',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_TABLE_CELL,
        priority=433,
        extract=ui_extract(3, params=_cell(1, 2, 'checkbox'), element_type='table'),
        examples=["Get the checkbox state from row '1' column 'Active' of the table"],
    ),

    # Sorting and columns
    GrammarRule(
        id='table-verify-sort-asc',
        pattern=rf'{_COLUMN}is\s+sorted\s+ascending$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_COLUMN_SORTED,
        priority=440,
        extract=mapped(params=_sorted('ascending'), element_type='table'),
        examples=["Verify column 'Name' is sorted ascending", "Verify that column 'Date' is sorted ascending"],
    ),
    GrammarRule(
        id='table-verify-sort-desc',
        pattern=rf'{_COLUMN}is\s+sorted\s+descending$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_COLUMN_SORTED,
        priority=441,
        extract=mapped(params=_sorted('descending'), element_type='table'),
        examples=["Verify column 'Amount' is sorted descending", "Verify that column 'Price' is sorted descending"],
    ),
    GrammarRule(
        id='table-verify-sort-date-asc',
        pattern=rf'{_COLUMN}is\s+sorted\s+ascending\s+as\s+dates?$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_COLUMN_SORTED,
        priority=442,
        extract=mapped(params=_sorted('ascending', 'date'), element_type='table'),
        examples=["Verify column 'Created' is sorted ascending as dates",
                  "Verify that column 'Modified' is sorted ascending as date"],
    ),
    GrammarRule(
        id='table-sort-by-click',
        pattern=rf'^click\s+column\s+header\s+{Q}\s+to\s+sort$',
        category=StepCategory.ACTION,
        intent=StepIntent.SORT_COLUMN,
        priority=443,
        extract=mapped(target_text=LiteralRef(1), element_type='columnheader'),
        examples=["Click column header 'Name' to sort", "Click column header 'Date' to sort"],
    ),
    GrammarRule(
        id='table-verify-column-exists',
        pattern=rf'{_COLUMN}exists?\s+in\s+(?:the\s+)?table$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_COLUMN_EXISTS,
        priority=444,
        extract=mapped(params={'columnRef': LiteralRef(1)}, element_type='table'),
        examples=["Verify column 'Status' exists in table", "Verify that column 'Name' exists in the table"],
    ),
    GrammarRule(
        id='table-verify-column-not-exists',
        pattern=rf'{_COLUMN}does\s+not\s+exist\s+in\s+(?:the\s+)?table$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_COLUMN_EXISTS,
        priority=445,
        extract=mapped(params={'columnRef': LiteralRef(1), 'comparisonOp': 'not-exists'}, element_type='table'),
        examples=["Verify column 'Internal ID' does not exist in table",
                  "Verify that column 'Hidden' does not exist in the table"],
    ),
]

WEB_TABLE = GrammarTable('table', (400, 449), WEB_TABLE_RULES)
