"""File grammar rules: parsing downloaded or named files and checking their contents"""
from stepgrammar.grammars.extractors import Q, LiteralRef, mapped
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent

_VERIFY = r'^verify\s+(?:that\s+)?(?:the\s+)?'

FILE_RULES = [
    GrammarRule(
        id='file-parse-csv',
        pattern=r'^parse\s+(?:the\s+)?downloaded\s+csv\s+file$',
        category=StepCategory.ACTION,
        intent=StepIntent.PARSE_CSV,
        priority=600,
        extract=mapped(),
        examples=['Parse downloaded CSV file', 'Parse the downloaded CSV file'],
    ),
    GrammarRule(
        id='file-parse-csv-named',
        pattern=rf'^parse\s+(?:the\s+)?csv\s+file\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.PARSE_CSV,
        priority=601,
        extract=mapped(params={'fileName': LiteralRef(1)}),
        examples=["Parse CSV file 'report.csv'", "Parse the CSV file 'export-data.csv'"],
    ),
    GrammarRule(
        id='file-parse-xlsx',
        pattern=r'^parse\s+(?:the\s+)?downloaded\s+xlsx\s+file$',
        category=StepCategory.ACTION,
        intent=StepIntent.PARSE_XLSX,
        priority=602,
        extract=mapped(),
        examples=['Parse downloaded XLSX file', 'Parse the downloaded XLSX file'],
    ),
    GrammarRule(
        id='file-parse-xlsx-sheet',
        pattern=rf'^parse\s+(?:the\s+)?xlsx\s+file\s+sheet\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.PARSE_XLSX,
        priority=603,
        extract=mapped(params={'mappingSheet': LiteralRef(1)}),
        examples=["Parse XLSX file sheet 'Summary'", "Parse the XLSX file sheet 'Sheet1'"],
    ),

    GrammarRule(
        id='file-verify-name-pattern',
        pattern=rf'{_VERIFY}downloaded\s+file\s+name\s+matches\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_FILE_NAME_PATTERN,
        priority=610,
        extract=mapped(params={'regexPattern': LiteralRef(1)}),
        examples=[
            r"Verify downloaded file name matches 'report_\d{4}\.csv'",
            r"Verify the downloaded file name matches 'export-.*\.xlsx'",
        ],
    ),
    GrammarRule(
        id='file-verify-row-count',
        pattern=rf'{_VERIFY}file\s+row\s+count\s+is\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_FILE_ROW_COUNT,
        priority=611,
        extract=mapped(expected_value=LiteralRef(1)),
        examples=["Verify file row count is '100'", "Verify the file row count is '50'"],
    ),
    GrammarRule(
        id='file-verify-row-count-context',
        pattern=rf'{_VERIFY}file\s+row\s+count\s+equals\s+count\s+of\s+context\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_FILE_ROW_COUNT,
        priority=612,
        extract=mapped(params={'sourceContextVar': LiteralRef(1)}),
        examples=[
            "Verify file row count equals count of context 'tableData'",
            "Verify the file row count equals count of context 'searchResults'",
        ],
    ),

    GrammarRule(
        id='file-get-row-count',
        pattern=r'^get\s+(?:the\s+)?row\s+count\s+from\s+(?:the\s+)?downloaded\s+file$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_FILE_ROW_COUNT,
        priority=620,
        extract=mapped(),
        examples=['Get row count from downloaded file', 'Get the row count from the downloaded file'],
    ),
    GrammarRule(
        id='file-get-headers',
        pattern=r'^get\s+(?:the\s+)?headers\s+from\s+(?:the\s+)?downloaded\s+file$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_FILE_HEADERS,
        priority=621,
        extract=mapped(),
        examples=['Get headers from downloaded file', 'Get the headers from the downloaded file'],
    ),

    GrammarRule(
        id='file-parse-json',
        pattern=rf'^parse\s+(?:the\s+)?json\s+file\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.PARSE_FILE,
        priority=630,
        extract=mapped(params={'fileName': LiteralRef(1), 'dataType': 'json'}),
        examples=["Parse JSON file 'config.json'", "Parse the JSON file 'test-data.json'"],
    ),
    GrammarRule(
        id='file-parse-yaml',
        pattern=rf'^parse\s+(?:the\s+)?ya?ml\s+file\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.PARSE_FILE,
        priority=631,
        extract=mapped(params={'fileName': LiteralRef(1), 'dataType': 'yaml'}),
        examples=["Parse YAML file 'settings.yaml'", "Parse the YML file 'environment.yml'"],
    ),

    GrammarRule(
        id='file-verify-data-matches',
        pattern=rf'{_VERIFY}file\s+data\s+in\s+context\s+{Q}\s+matches\s+context\s+{Q}'
                rf'\s+using\s+mapping\s+file\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DATA_MATCH,
        priority=640,
        extract=mapped(params={
            'sourceContextVar': LiteralRef(1),
            'targetContextVar': LiteralRef(2),
            'mappingFile': LiteralRef(3),
        }),
        examples=[
            "Verify file data in context 'fileData' matches context 'tableData' "
            "using mapping file 'field-mapping.json'",
            "Verify the file data in context 'csvRows' matches context 'gridRows' "
            "using mapping file 'column-map.json'",
        ],
    ),
]

FILE_TABLE = GrammarTable('file', (600, 649), FILE_RULES)
