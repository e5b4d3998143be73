"""
Core grammar types
Categories, the closed intent vocabulary, extraction results and grammar rules
"""
import re
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Type

from stepgrammar.utils.helpers import camel_to_snake


class StepCategory(Enum):
    ACTION = "action"
    QUERY = "query"
    ASSERTION = "assertion"


class StepIntent(str, Enum):
    """What kind of test operation a matched sentence represents"""
    # UI actions
    CLICK = "click"
    DOUBLE_CLICK = "double-click"
    RIGHT_CLICK = "right-click"
    FILL = "fill"
    CLEAR = "clear"
    SELECT = "select"
    CHECK = "check"
    UNCHECK = "uncheck"
    TOGGLE = "toggle"
    HOVER = "hover"
    SCROLL = "scroll"
    SCROLL_TO = "scroll-to"
    FOCUS = "focus"
    PRESS_KEY = "press-key"
    UPLOAD = "upload"
    DRAG = "drag"
    WAIT_FOR = "wait-for"
    WAIT_SECONDS = "wait-seconds"
    WAIT_URL_CHANGE = "wait-url-change"
    WAIT_TEXT_CHANGE = "wait-text-change"
    WAIT_PAGE_LOAD = "wait-page-load"

    # Navigation
    NAVIGATE = "navigate"

    # Browser: tabs, frames, dialogs, cookies and storage
    SWITCH_TAB = "switch-tab"
    OPEN_NEW_TAB = "open-new-tab"
    CLOSE_TAB = "close-tab"
    SWITCH_BROWSER = "switch-browser"
    CLEAR_SESSION = "clear-session"
    SWITCH_FRAME = "switch-frame"
    SWITCH_MAIN_FRAME = "switch-main-frame"
    ACCEPT_DIALOG = "accept-dialog"
    DISMISS_DIALOG = "dismiss-dialog"
    HANDLE_NEXT_DIALOG = "handle-next-dialog"
    VERIFY_DIALOG_TEXT = "verify-dialog-text"
    CLEAR_COOKIES = "clear-cookies"
    GET_COOKIE = "get-cookie"
    CLEAR_STORAGE = "clear-storage"
    SET_STORAGE_ITEM = "set-storage-item"
    GET_STORAGE_ITEM = "get-storage-item"

    # Tables
    GET_TABLE_DATA = "get-table-data"
    GET_TABLE_CELL = "get-table-cell"
    GET_TABLE_COLUMN = "get-table-column"
    GET_TABLE_ROW_COUNT = "get-table-row-count"
    VERIFY_TABLE_CELL = "verify-table-cell"
    EXPAND_ROW = "expand-row"
    COLLAPSE_ROW = "collapse-row"
    SORT_COLUMN = "sort-column"
    VERIFY_COLUMN_SORTED = "verify-column-sorted"
    VERIFY_COLUMN_EXISTS = "verify-column-exists"

    # Form capture
    CAPTURE_FORM_DATA = "capture-form-data"

    # Orchestration
    CALL_HELPER = "call-helper"

    # Data generation and scripting
    GENERATE_DATA = "generate-data"
    SET_VARIABLE = "set-variable"
    TAKE_SCREENSHOT = "take-screenshot"
    VERIFY_DOWNLOAD = "verify-download"
    GET_DOWNLOAD_PATH = "get-download-path"
    VERIFY_DOWNLOAD_CONTENT = "verify-download-content"
    EXECUTE_JS = "execute-js"
    EVALUATE_JS = "evaluate-js"

    # Database
    DB_QUERY = "db-query"
    DB_QUERY_FILE = "db-query-file"
    GET_DB_VALUE = "get-db-value"
    GET_DB_ROW = "get-db-row"
    GET_DB_ROWS = "get-db-rows"
    GET_DB_COUNT = "get-db-count"
    VERIFY_DB_EXISTS = "verify-db-exists"
    VERIFY_DB_NOT_EXISTS = "verify-db-not-exists"
    VERIFY_DB_FIELD = "verify-db-field"
    VERIFY_DB_COUNT = "verify-db-count"
    DB_UPDATE = "db-update"
    DB_RESOLVE_OR_USE = "db-resolve-or-use"

    # Files
    PARSE_CSV = "parse-csv"
    PARSE_XLSX = "parse-xlsx"
    PARSE_FILE = "parse-file"
    VERIFY_FILE_NAME_PATTERN = "verify-file-name-pattern"
    VERIFY_FILE_ROW_COUNT = "verify-file-row-count"
    GET_FILE_ROW_COUNT = "get-file-row-count"
    GET_FILE_HEADERS = "get-file-headers"

    # Comparison
    VERIFY_TOLERANCE = "verify-tolerance"
    VERIFY_CONTEXT_FIELD = "verify-context-field"
    VERIFY_CONTEXT_MATCH = "verify-context-match"
    VERIFY_COUNT_MATCH = "verify-count-match"
    VERIFY_DATA_MATCH = "verify-data-match"
    VERIFY_ACCUMULATED = "verify-accumulated"

    # Context
    GET_CONTEXT_FIELD = "get-context-field"
    GET_CONTEXT_COUNT = "get-context-count"
    GET_CONTEXT_KEYS = "get-context-keys"
    COPY_CONTEXT_VAR = "copy-context-var"
    SET_CONTEXT_FIELD = "set-context-field"
    CLEAR_CONTEXT_VAR = "clear-context-var"

    # Mapping
    LOAD_MAPPING = "load-mapping"
    TRANSFORM_DATA = "transform-data"
    PREPARE_TEST_DATA = "prepare-test-data"

    # API
    API_SET_CONTEXT = "api-set-context"
    API_SET_HEADER = "api-set-header"
    API_SET_AUTH = "api-set-auth"
    API_CLEAR_CONTEXT = "api-clear-context"
    API_CALL = "api-call"
    API_CALL_FILE = "api-call-file"
    API_UPLOAD = "api-upload"
    API_DOWNLOAD = "api-download"
    API_POLL = "api-poll"
    GET_API_RESPONSE = "get-api-response"
    API_SAVE_RESPONSE = "api-save-response"
    API_SAVE_REQUEST = "api-save-request"
    API_PRINT = "api-print"
    VERIFY_API_RESPONSE = "verify-api-response"
    VERIFY_API_SCHEMA = "verify-api-schema"
    API_CHAIN = "api-chain"
    API_EXECUTE_CHAIN = "api-execute-chain"
    API_SOAP = "api-soap"

    # UI assertions
    VERIFY_VISIBLE = "verify-visible"
    VERIFY_HIDDEN = "verify-hidden"
    VERIFY_NOT_PRESENT = "verify-not-present"
    VERIFY_TEXT = "verify-text"
    VERIFY_CONTAINS = "verify-contains"
    VERIFY_NOT_CONTAINS = "verify-not-contains"
    VERIFY_ENABLED = "verify-enabled"
    VERIFY_DISABLED = "verify-disabled"
    VERIFY_CHECKED = "verify-checked"
    VERIFY_UNCHECKED = "verify-unchecked"
    VERIFY_COUNT = "verify-count"
    VERIFY_VALUE = "verify-value"
    VERIFY_ATTRIBUTE = "verify-attribute"
    VERIFY_URL = "verify-url"
    VERIFY_TITLE = "verify-title"

    # UI queries
    GET_TEXT = "get-text"
    GET_VALUE = "get-value"
    GET_ATTRIBUTE = "get-attribute"
    GET_COUNT = "get-count"
    GET_LIST = "get-list"
    GET_URL = "get-url"
    GET_TITLE = "get-title"
    GET_URL_PARAM = "get-url-param"


# Shared parameter vocabulary understood by downstream executors
PARAM_KEYS = frozenset([
    # database
    'dbAlias', 'dbQuery', 'dbParams', 'dbFile', 'dbField',
    # api
    'apiUrl', 'httpMethod', 'requestBody', 'jsonPath', 'apiContext', 'apiAuthType',
    'apiAuthParams', 'apiPayloadFile', 'apiResponseSavePath', 'apiPrintTarget',
    'apiPollField', 'apiPollExpected', 'apiPollInterval', 'apiPollMaxTime',
    'apiSchemaFile', 'soapOperation', 'soapParams', 'xpathExpression', 'apiChainFile',
    'apiQueryParams', 'apiFormData', 'regexPattern',
    # comparison and context
    'comparisonOp', 'tolerance', 'sourceContextVar', 'targetContextVar', 'contextField',
    'contextRowIndex', 'exceptFields', 'orderIndependentFields', 'keyFields', 'separator',
    # mapping and files
    'mappingFile', 'mappingSheet', 'fileName', 'filePath', 'fileContent',
    # data generation
    'dataType', 'length', 'rangeMin', 'rangeMax', 'decimalPlaces', 'numberFormat',
    'dateFormat', 'businessDaysOffset', 'variableName', 'screenshotName', 'script',
    # navigation and ui
    'url', 'navigationAction', 'attribute', 'timeout', 'key', 'direction', 'waitState',
    'rowIndex', 'tableRef', 'dropTarget', 'count', 'urlParam',
    # browser
    'tabIndex', 'browserType', 'loginUrl', 'frameSelector', 'dialogAction', 'promptText',
    'cookieName', 'storageType', 'storageKey',
    # tables
    'columnRef', 'cellElementType', 'expandAction', 'sortDirection', 'sortDataType',
    # form capture
    'captureScope', 'captureFields',
    # orchestration
    'helperClass', 'helperMethod', 'helperArgs',
])


@dataclass
class StepModifiers:
    """Flags that change how an intent is executed"""
    negated: bool = False
    force: bool = False
    exact: bool = False
    case_insensitive: bool = False

    def to_dict(self) -> Dict[str, bool]:
        """Only the flags that are set, with contract names"""
        names = {'negated': 'negated', 'force': 'force', 'exact': 'exact',
                 'case_insensitive': 'caseInsensitive'}
        return {names[f.name]: True for f in fields(self) if getattr(self, f.name)}

    def __bool__(self) -> bool:
        return any(getattr(self, f.name) for f in fields(self))


@dataclass
class ExtractionResult:
    """Structured output of a rule's extract function"""
    target_text: str = ''
    value: Optional[str] = None
    expected_value: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)
    modifiers: StepModifiers = field(default_factory=StepModifiers)
    element_type: Optional[str] = None


Extractor = Callable[[re.Match, Any], ExtractionResult]


@dataclass
class GrammarRule:
    """One pattern, its metadata and the function that extracts its intent"""
    id: str
    pattern: str
    category: StepCategory
    intent: StepIntent
    priority: int
    extract: Extractor
    examples: List[str] = field(default_factory=list)
    compiled_pattern: re.Pattern = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        """Compile the regex pattern"""
        self.compiled_pattern = re.compile(self.pattern, re.IGNORECASE)

    def match(self, text: str) -> Optional[re.Match]:
        return self.compiled_pattern.fullmatch(text)


# Typed parameter variants, one per intent family. Unknown keys land in extras.

@dataclass(frozen=True)
class TypedParams:
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> 'TypedParams':
        known = {f.name for f in fields(cls)} - {'extras'}
        values: Dict[str, Any] = {}
        extras: Dict[str, Any] = {}
        for key, value in params.items():
            name = camel_to_snake(key)
            if name in known:
                values[name] = value
            else:
                extras[key] = value
        return cls(extras=extras, **values)


@dataclass(frozen=True)
class ElementParams(TypedParams):
    attribute: Optional[str] = None
    comparison_op: Optional[str] = None
    row_index: Optional[int] = None
    table_ref: Optional[str] = None
    column_ref: Optional[str] = None
    cell_element_type: Optional[str] = None
    key: Optional[str] = None
    direction: Optional[str] = None
    wait_state: Optional[str] = None
    timeout: Optional[int] = None
    drop_target: Optional[str] = None
    count: Optional[int] = None
    url_param: Optional[str] = None
    url: Optional[str] = None
    file_path: Optional[str] = None


@dataclass(frozen=True)
class NavigationParams(TypedParams):
    url: Optional[str] = None
    navigation_action: Optional[str] = None


@dataclass(frozen=True)
class BrowserParams(TypedParams):
    tab_index: Optional[int] = None
    url: Optional[str] = None
    browser_type: Optional[str] = None
    login_url: Optional[str] = None
    frame_selector: Optional[str] = None
    dialog_action: Optional[str] = None
    prompt_text: Optional[str] = None
    cookie_name: Optional[str] = None
    storage_type: Optional[str] = None
    storage_key: Optional[str] = None


@dataclass(frozen=True)
class TableParams(TypedParams):
    row_index: Optional[int] = None
    column_ref: Optional[str] = None
    cell_element_type: Optional[str] = None
    expand_action: Optional[str] = None
    sort_direction: Optional[str] = None
    sort_data_type: Optional[str] = None
    comparison_op: Optional[str] = None


@dataclass(frozen=True)
class FormParams(TypedParams):
    capture_scope: Optional[str] = None
    capture_fields: Optional[str] = None


@dataclass(frozen=True)
class HelperParams(TypedParams):
    helper_class: Optional[str] = None
    helper_method: Optional[str] = None
    helper_args: Optional[str] = None
    source_context_var: Optional[str] = None
    target_context_var: Optional[str] = None


@dataclass(frozen=True)
class DataParams(TypedParams):
    data_type: Optional[str] = None
    length: Optional[int] = None
    range_min: Optional[float] = None
    range_max: Optional[float] = None
    decimal_places: Optional[int] = None
    number_format: Optional[str] = None
    date_format: Optional[str] = None
    business_days_offset: Optional[int] = None
    variable_name: Optional[str] = None
    screenshot_name: Optional[str] = None
    file_name: Optional[str] = None
    file_content: Optional[str] = None
    script: Optional[str] = None


@dataclass(frozen=True)
class DatabaseParams(TypedParams):
    db_alias: Optional[str] = None
    db_query: Optional[str] = None
    db_params: Optional[str] = None
    db_file: Optional[str] = None
    db_field: Optional[str] = None
    comparison_op: Optional[str] = None
    tolerance: Optional[float] = None
    variable_name: Optional[str] = None


@dataclass(frozen=True)
class FileParams(TypedParams):
    file_name: Optional[str] = None
    mapping_sheet: Optional[str] = None
    regex_pattern: Optional[str] = None
    data_type: Optional[str] = None
    source_context_var: Optional[str] = None


@dataclass(frozen=True)
class ComparisonParams(TypedParams):
    comparison_op: Optional[str] = None
    tolerance: Optional[float] = None
    source_context_var: Optional[str] = None
    target_context_var: Optional[str] = None
    context_field: Optional[str] = None
    except_fields: Optional[str] = None
    key_fields: Optional[str] = None
    mapping_file: Optional[str] = None
    order_independent_fields: Optional[str] = None
    json_path: Optional[str] = None
    db_alias: Optional[str] = None
    db_query: Optional[str] = None
    db_field: Optional[str] = None


@dataclass(frozen=True)
class ContextParams(TypedParams):
    source_context_var: Optional[str] = None
    target_context_var: Optional[str] = None
    context_field: Optional[str] = None
    context_row_index: Optional[int] = None
    separator: Optional[str] = None
    date_format: Optional[str] = None
    comparison_op: Optional[str] = None


@dataclass(frozen=True)
class MappingParams(TypedParams):
    mapping_file: Optional[str] = None
    mapping_sheet: Optional[str] = None
    source_context_var: Optional[str] = None
    target_context_var: Optional[str] = None


@dataclass(frozen=True)
class ApiParams(TypedParams):
    api_url: Optional[str] = None
    http_method: Optional[str] = None
    request_body: Optional[str] = None
    json_path: Optional[str] = None
    comparison_op: Optional[str] = None
    attribute: Optional[str] = None
    url: Optional[str] = None
    timeout: Optional[int] = None
    api_context: Optional[str] = None
    api_auth_type: Optional[str] = None
    api_auth_params: Optional[str] = None
    api_payload_file: Optional[str] = None
    api_response_save_path: Optional[str] = None
    api_print_target: Optional[str] = None
    api_poll_field: Optional[str] = None
    api_poll_expected: Optional[str] = None
    api_poll_interval: Optional[int] = None
    api_poll_max_time: Optional[int] = None
    api_schema_file: Optional[str] = None
    api_chain_file: Optional[str] = None
    api_query_params: Optional[str] = None
    api_form_data: Optional[str] = None
    soap_operation: Optional[str] = None
    soap_params: Optional[str] = None
    xpath_expression: Optional[str] = None
    regex_pattern: Optional[str] = None
    file_path: Optional[str] = None


_FAMILIES: Dict[Type[TypedParams], List[StepIntent]] = {
    ElementParams: [
        StepIntent.CLICK, StepIntent.DOUBLE_CLICK, StepIntent.RIGHT_CLICK, StepIntent.FILL,
        StepIntent.CLEAR, StepIntent.SELECT, StepIntent.CHECK, StepIntent.UNCHECK,
        StepIntent.TOGGLE, StepIntent.HOVER, StepIntent.SCROLL, StepIntent.SCROLL_TO,
        StepIntent.FOCUS, StepIntent.PRESS_KEY, StepIntent.UPLOAD, StepIntent.DRAG,
        StepIntent.WAIT_FOR, StepIntent.WAIT_SECONDS, StepIntent.WAIT_URL_CHANGE,
        StepIntent.WAIT_TEXT_CHANGE, StepIntent.WAIT_PAGE_LOAD,
        StepIntent.VERIFY_VISIBLE, StepIntent.VERIFY_HIDDEN, StepIntent.VERIFY_NOT_PRESENT,
        StepIntent.VERIFY_TEXT, StepIntent.VERIFY_CONTAINS, StepIntent.VERIFY_NOT_CONTAINS,
        StepIntent.VERIFY_ENABLED, StepIntent.VERIFY_DISABLED, StepIntent.VERIFY_CHECKED,
        StepIntent.VERIFY_UNCHECKED, StepIntent.VERIFY_COUNT, StepIntent.VERIFY_VALUE,
        StepIntent.VERIFY_ATTRIBUTE, StepIntent.VERIFY_URL, StepIntent.VERIFY_TITLE,
        StepIntent.GET_TEXT, StepIntent.GET_VALUE, StepIntent.GET_ATTRIBUTE,
        StepIntent.GET_COUNT, StepIntent.GET_LIST, StepIntent.GET_URL, StepIntent.GET_TITLE,
        StepIntent.GET_URL_PARAM,
    ],
    NavigationParams: [StepIntent.NAVIGATE],
    BrowserParams: [
        StepIntent.SWITCH_TAB, StepIntent.OPEN_NEW_TAB, StepIntent.CLOSE_TAB,
        StepIntent.SWITCH_BROWSER, StepIntent.CLEAR_SESSION, StepIntent.SWITCH_FRAME,
        StepIntent.SWITCH_MAIN_FRAME, StepIntent.ACCEPT_DIALOG, StepIntent.DISMISS_DIALOG,
        StepIntent.HANDLE_NEXT_DIALOG, StepIntent.VERIFY_DIALOG_TEXT, StepIntent.CLEAR_COOKIES,
        StepIntent.GET_COOKIE, StepIntent.CLEAR_STORAGE, StepIntent.SET_STORAGE_ITEM,
        StepIntent.GET_STORAGE_ITEM,
    ],
    TableParams: [
        StepIntent.GET_TABLE_DATA, StepIntent.GET_TABLE_CELL, StepIntent.GET_TABLE_COLUMN,
        StepIntent.GET_TABLE_ROW_COUNT, StepIntent.VERIFY_TABLE_CELL, StepIntent.EXPAND_ROW,
        StepIntent.COLLAPSE_ROW, StepIntent.SORT_COLUMN, StepIntent.VERIFY_COLUMN_SORTED,
        StepIntent.VERIFY_COLUMN_EXISTS,
    ],
    FormParams: [StepIntent.CAPTURE_FORM_DATA],
    HelperParams: [StepIntent.CALL_HELPER],
    DataParams: [
        StepIntent.GENERATE_DATA, StepIntent.SET_VARIABLE, StepIntent.TAKE_SCREENSHOT,
        StepIntent.VERIFY_DOWNLOAD, StepIntent.GET_DOWNLOAD_PATH,
        StepIntent.VERIFY_DOWNLOAD_CONTENT, StepIntent.EXECUTE_JS, StepIntent.EVALUATE_JS,
    ],
    DatabaseParams: [
        StepIntent.DB_QUERY, StepIntent.DB_QUERY_FILE, StepIntent.GET_DB_VALUE,
        StepIntent.GET_DB_ROW, StepIntent.GET_DB_ROWS, StepIntent.GET_DB_COUNT,
        StepIntent.VERIFY_DB_EXISTS, StepIntent.VERIFY_DB_NOT_EXISTS,
        StepIntent.VERIFY_DB_FIELD, StepIntent.VERIFY_DB_COUNT, StepIntent.DB_UPDATE,
        StepIntent.DB_RESOLVE_OR_USE,
    ],
    FileParams: [
        StepIntent.PARSE_CSV, StepIntent.PARSE_XLSX, StepIntent.PARSE_FILE,
        StepIntent.VERIFY_FILE_NAME_PATTERN, StepIntent.VERIFY_FILE_ROW_COUNT,
        StepIntent.GET_FILE_ROW_COUNT, StepIntent.GET_FILE_HEADERS,
    ],
    ComparisonParams: [
        StepIntent.VERIFY_TOLERANCE, StepIntent.VERIFY_CONTEXT_FIELD,
        StepIntent.VERIFY_CONTEXT_MATCH, StepIntent.VERIFY_COUNT_MATCH,
        StepIntent.VERIFY_DATA_MATCH, StepIntent.VERIFY_ACCUMULATED,
    ],
    ContextParams: [
        StepIntent.GET_CONTEXT_FIELD, StepIntent.GET_CONTEXT_COUNT,
        StepIntent.GET_CONTEXT_KEYS, StepIntent.COPY_CONTEXT_VAR,
        StepIntent.SET_CONTEXT_FIELD, StepIntent.CLEAR_CONTEXT_VAR,
    ],
    MappingParams: [
        StepIntent.LOAD_MAPPING, StepIntent.TRANSFORM_DATA, StepIntent.PREPARE_TEST_DATA,
    ],
    ApiParams: [
        StepIntent.API_SET_CONTEXT, StepIntent.API_SET_HEADER, StepIntent.API_SET_AUTH,
        StepIntent.API_CLEAR_CONTEXT, StepIntent.API_CALL, StepIntent.API_CALL_FILE,
        StepIntent.API_UPLOAD, StepIntent.API_DOWNLOAD, StepIntent.API_POLL,
        StepIntent.GET_API_RESPONSE, StepIntent.API_SAVE_RESPONSE,
        StepIntent.API_SAVE_REQUEST, StepIntent.API_PRINT, StepIntent.VERIFY_API_RESPONSE,
        StepIntent.VERIFY_API_SCHEMA, StepIntent.API_CHAIN, StepIntent.API_EXECUTE_CHAIN,
        StepIntent.API_SOAP,
    ],
}

INTENT_PARAM_TYPES: Dict[StepIntent, Type[TypedParams]] = {
    intent: params_type
    for params_type, intents in _FAMILIES.items()
    for intent in intents
}


def typed_params(intent: StepIntent, params: Dict[str, Any]) -> TypedParams:
    """Build the typed variant for an intent from its flat params"""
    return INTENT_PARAM_TYPES[intent].from_params(params)
