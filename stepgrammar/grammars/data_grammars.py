"""
Data grammar rules
Test data generation, variables, screenshots, download checks and JavaScript
"""
from stepgrammar.grammars.extractors import Q, GroupRef, LiteralRef, mapped
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent

DATA_RULES = [
    GrammarRule(
        id='data-generate-uuid',
        pattern=r'^generate\s+(?:a\s+)?(?:uuid|guid|unique\s+id)$',
        category=StepCategory.QUERY,
        intent=StepIntent.GENERATE_DATA,
        priority=450,
        extract=mapped(params={'dataType': 'uuid'}),
        examples=['Generate a UUID', 'Generate a unique id', 'Generate a GUID'],
    ),
    GrammarRule(
        id='data-generate-timestamp',
        pattern=r'^generate\s+(?:a\s+)?(?:timestamp|date|datetime|current\s+date(?:time)?)$',
        category=StepCategory.QUERY,
        intent=StepIntent.GENERATE_DATA,
        priority=451,
        extract=mapped(params={'dataType': 'timestamp'}),
        examples=['Generate a timestamp', 'Generate a date', 'Generate a current datetime'],
    ),
    GrammarRule(
        id='data-generate-random-string',
        pattern=r'^generate\s+(?:a\s+)?random\s+string(?:\s+of\s+length\s+(\d+))?$',
        category=StepCategory.QUERY,
        intent=StepIntent.GENERATE_DATA,
        priority=452,
        extract=mapped(params={
            'dataType': 'random-string',
            'length': GroupRef(1, optional=True, convert=int),
        }),
        examples=['Generate a random string of length 10', 'Generate a random string'],
    ),
    GrammarRule(
        id='data-generate-random-number',
        pattern=r'^generate\s+(?:a\s+)?random\s+number(?:\s+between\s+(\d+)\s+and\s+(\d+))?$',
        category=StepCategory.QUERY,
        intent=StepIntent.GENERATE_DATA,
        priority=453,
        extract=mapped(params={
            'dataType': 'random-number',
            'rangeMin': GroupRef(1, optional=True, convert=int),
            'rangeMax': GroupRef(2, optional=True, convert=int),
        }),
        examples=['Generate a random number between 1 and 100', 'Generate a random number'],
    ),
    GrammarRule(
        id='data-generate-random-email',
        pattern=r'^generate\s+(?:a\s+)?random\s+email(?:\s+address)?$',
        category=StepCategory.QUERY,
        intent=StepIntent.GENERATE_DATA,
        priority=454,
        extract=mapped(params={'dataType': 'random-email'}),
        examples=['Generate a random email', 'Generate a random email address'],
    ),

    GrammarRule(
        id='data-set-variable',
        pattern=rf'^set\s+(?:the\s+)?variable\s+{Q}\s+to\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.SET_VARIABLE,
        priority=460,
        extract=mapped(params={'variableName': LiteralRef(1)}, value=LiteralRef(2)),
        examples=["Set variable 'userName' to 'admin'", "Set the variable 'testId' to '12345'"],
    ),

    GrammarRule(
        id='data-take-screenshot',
        pattern=rf'^take\s+(?:a\s+)?screenshot(?:\s+(?:as|named?)\s+{Q})?$',
        category=StepCategory.ACTION,
        intent=StepIntent.TAKE_SCREENSHOT,
        priority=470,
        extract=mapped(params={'screenshotName': LiteralRef(1, optional=True)}),
        examples=[
            'Take a screenshot',
            "Take a screenshot as 'login-page'",
            "Take screenshot named 'error-state'",
        ],
    ),

    GrammarRule(
        id='data-verify-download',
        pattern=rf'^verify\s+(?:that\s+)?(?:the\s+)?(?:file\s+)?{Q}\s+was\s+downloaded$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DOWNLOAD,
        priority=480,
        extract=mapped(params={'fileName': LiteralRef(1)}),
        examples=["Verify file 'report.csv' was downloaded", "Verify 'data.xlsx' was downloaded"],
    ),
    GrammarRule(
        id='data-verify-a-download',
        pattern=r'^verify\s+(?:that\s+)?a\s+file\s+was\s+downloaded$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DOWNLOAD,
        priority=481,
        extract=mapped(),
        examples=['Verify a file was downloaded', 'Verify that a file was downloaded'],
    ),
    GrammarRule(
        id='data-get-download-path',
        pattern=r'^(?:get|read)\s+(?:the\s+)?(?:path|location)\s+of\s+(?:the\s+)?'
                r'(?:downloaded|last\s+downloaded)\s+file$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_DOWNLOAD_PATH,
        priority=482,
        extract=mapped(),
        examples=['Get the path of the downloaded file',
                  'Get the location of the last downloaded file'],
    ),
    GrammarRule(
        id='data-verify-download-content',
        pattern=rf'^verify\s+(?:that\s+)?(?:the\s+)?downloaded\s+file\s+contains?\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DOWNLOAD_CONTENT,
        priority=483,
        extract=mapped(params={'fileContent': LiteralRef(1)}),
        examples=["Verify the downloaded file contains 'Total Revenue'",
                  "Verify downloaded file contains 'header'"],
    ),
    GrammarRule(
        id='data-verify-download-named-content',
        pattern=rf'^verify\s+(?:that\s+)?(?:the\s+)?(?:downloaded\s+)?file\s+{Q}\s+contains?\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DOWNLOAD_CONTENT,
        priority=484,
        extract=mapped(params={'fileName': LiteralRef(1), 'fileContent': LiteralRef(2)}),
        examples=["Verify downloaded file 'data.csv' contains 'header'"],
    ),

    GrammarRule(
        id='data-execute-js',
        pattern=rf'^(?:execute|run)\s+(?:the\s+)?(?:javascript|js|script)\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.EXECUTE_JS,
        priority=496,
        extract=mapped(params={'script': LiteralRef(1)}),
        examples=[
            """Execute JavaScript 'document.title = "New Title"'""",
            "Run script 'window.scrollTo(0, document.body.scrollHeight)'",
        ],
    ),
    GrammarRule(
        id='data-evaluate-js',
        pattern=rf'^(?:evaluate|get)\s+(?:the\s+)?(?:javascript|js)\s+(?:value\s+)?{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.EVALUATE_JS,
        priority=497,
        extract=mapped(params={'script': LiteralRef(1)}),
        examples=[
            """Evaluate JavaScript 'document.querySelectorAll("tr").length'""",
            "Get JavaScript value 'window.innerWidth'",
        ],
    ),
]

DATA_TABLE = GrammarTable('data', (450, 499), DATA_RULES)
