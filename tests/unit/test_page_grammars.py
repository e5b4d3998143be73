"""Unit tests for the browser, web table, form and helper grammar tables"""
import pytest

from stepgrammar.grammars.types import ElementParams, HelperParams, StepCategory, StepIntent


@pytest.mark.parametrize("sentence, rule_id, params", [
    ("Open a new tab", 'browser-open-new-tab', {}),
    ("Open a new tab with 'https://example.com'", 'browser-open-new-tab', {'url': 'https://example.com'}),
    ("Switch to tab 2", 'browser-switch-tab-index', {'tabIndex': 2}),
    ("Switch to the latest tab", 'browser-switch-tab-latest', {'tabIndex': -1}),
    ("Switch to the original tab", 'browser-switch-tab-main', {'tabIndex': 0}),
    ("Close tab 3", 'browser-close-tab-index', {'tabIndex': 3}),
    ("Switch to Firefox browser", 'browser-switch-browser', {'browserType': 'firefox'}),
    ("Clear session", 'browser-clear-session', {}),
    ("Clear session and navigate to '/login'", 'browser-clear-session-navigate', {'loginUrl': '/login'}),
    ("Switch to frame named 'content'", 'browser-switch-frame-named', {'frameSelector': 'content'}),
    ("Switch to iframe 0", 'browser-switch-frame-index', {'frameSelector': '0'}),
    ("Handle the next alert by dismissing", 'browser-handle-next-dialog-dismiss', {'dialogAction': 'dismiss'}),
    ("Get the cookie 'session_token'", 'browser-get-cookie', {'cookieName': 'session_token'}),
    ("Clear session storage", 'browser-clear-session-storage', {'storageType': 'session'}),
    ("Clear storage", 'browser-clear-all-storage', {}),
    ("Read session storage 'auth'", 'browser-get-session-storage', {'storageType': 'session', 'storageKey': 'auth'}),
])
def test_browser_params(grammar, sentence, rule_id, params):
    result = grammar.parse(sentence)

    assert result.matched, sentence
    assert result.step.rule_id == rule_id
    assert result.step.params == params


def test_accept_and_dismiss_are_distinct(grammar):
    accept = grammar.parse("Accept the alert").step
    dismiss = grammar.parse("Dismiss the alert").step

    assert accept.intent is StepIntent.ACCEPT_DIALOG
    assert accept.params == {'dialogAction': 'accept'}
    assert dismiss.intent is StepIntent.DISMISS_DIALOG
    assert dismiss.params == {'dialogAction': 'dismiss'}


def test_clear_session_leaves_context_and_fields_alone(grammar):
    assert grammar.parse("Clear context 'tempData'").step.rule_id == 'ctx-clear-var'
    assert grammar.parse("Clear the search field").step.rule_id == 'action-clear-field'


def test_prompt_text(grammar):
    step = grammar.parse("Type 'test' into the prompt and accept").step

    assert step.intent is StepIntent.ACCEPT_DIALOG
    assert step.value == 'test'
    assert step.params == {'dialogAction': 'accept', 'promptText': 'test'}


def test_dialog_text_assertion(grammar):
    step = grammar.parse("Verify the alert text is 'Are you sure?'").step

    assert step.category is StepCategory.ASSERTION
    assert step.intent is StepIntent.VERIFY_DIALOG_TEXT
    assert step.expected_value == 'Are you sure?'


def test_storage_item(grammar):
    step = grammar.parse("Set local storage 'theme' to 'dark'").step

    assert step.intent is StepIntent.SET_STORAGE_ITEM
    assert step.value == 'dark'
    assert step.params == {'storageType': 'local', 'storageKey': 'theme'}
    assert step.typed_params().storage_key == 'theme'


def test_table_cell_by_header(grammar):
    step = grammar.parse("Get the value from row 2 column 'Price' of the results table").step

    assert step.rule_id == 'table-get-cell-by-header'
    assert step.params == {'rowIndex': 2, 'columnRef': 'Price'}
    assert step.target_text == 'results'
    assert step.target.element_type == 'table'


def test_table_cell_by_index_keeps_column_as_text(grammar):
    step = grammar.parse("Get the value from row 2 column 3 of the table").step

    assert step.rule_id == 'table-get-cell-by-index'
    assert step.params == {'rowIndex': 2, 'columnRef': '3'}
    assert step.target.element_type == 'table'


def test_table_cell_verification(grammar):
    step = grammar.parse("Assert row 1 column 'Name' in the results table equals 'John'").step

    assert step.intent is StepIntent.VERIFY_TABLE_CELL
    assert step.expected_value == 'John'
    assert step.params == {'rowIndex': 1, 'columnRef': 'Name'}
    assert step.target_text == 'results'


def test_table_row_count(grammar):
    step = grammar.parse("Count rows in the results table").step

    assert step.intent is StepIntent.GET_TABLE_ROW_COUNT
    assert step.target_text == 'results'


def test_quoted_row_numbers(grammar):
    expand = grammar.parse("Expand row '3' of the results table").step
    collapse = grammar.parse("Collapse row 'first' in the table").step

    assert expand.params == {'rowIndex': 3, 'expandAction': 'expand'}
    assert collapse.intent is StepIntent.COLLAPSE_ROW
    assert collapse.params == {'rowIndex': 1, 'expandAction': 'collapse'}


def test_expand_row_by_text(grammar):
    step = grammar.parse("Expand the row containing 'A100' in the table").step

    assert step.value == 'A100'
    assert step.params == {'expandAction': 'expand'}


def test_cell_link_click(grammar):
    step = grammar.parse("Click the link in row '2' column 'Details' in the results table").step

    assert step.rule_id == 'table-click-cell-link'
    assert step.intent is StepIntent.CLICK
    assert step.typed_params() == ElementParams(row_index=2, column_ref='Details', cell_element_type='link')


def test_cell_dropdown_select(grammar):
    step = grammar.parse("Select 'Approved' from the dropdown in row '1' column 'Status' of the table").step

    assert step.intent is StepIntent.SELECT
    assert step.value == 'Approved'
    assert step.params == {'rowIndex': 1, 'columnRef': 'Status', 'cellElementType': 'dropdown'}


def test_row_scoped_actions_still_win_for_bare_row_numbers(grammar):
    step = grammar.parse("Click the Edit button on row 1 of the Users table").step

    assert step.rule_id == 'action-table-click'
    assert step.params == {'rowIndex': 1, 'tableRef': 'Users'}


@pytest.mark.parametrize("sentence, params", [
    ("Verify column 'Amount' is sorted descending",
     {'columnRef': 'Amount', 'sortDirection': 'descending', 'sortDataType': 'string'}),
    ("Verify that column 'Modified' is sorted ascending as date",
     {'columnRef': 'Modified', 'sortDirection': 'ascending', 'sortDataType': 'date'}),
    ("Verify column 'Status' exists in table", {'columnRef': 'Status'}),
    ("Verify that column 'Hidden' does not exist in the table",
     {'columnRef': 'Hidden', 'comparisonOp': 'not-exists'}),
])
def test_column_checks(grammar, sentence, params):
    step = grammar.parse(sentence).step

    assert step.category is StepCategory.ASSERTION
    assert step.params == params
    assert step.target.element_type == 'table'


def test_sort_by_header_click(grammar):
    step = grammar.parse("Click column header 'Date' to sort").step

    assert step.intent is StepIntent.SORT_COLUMN
    assert step.target_text == 'Date'
    assert step.target.element_type == 'columnheader'


@pytest.mark.parametrize("sentence, params", [
    ("Capture the form field values", {}),
    ("Capture all form field values from the 'Personal Info' form", {'captureScope': 'Personal Info'}),
    ("Capture fields 'Username, Email' from the page", {'captureFields': 'Username, Email'}),
    ("Capture all field values from the modal", {'captureScope': 'modal'}),
])
def test_form_capture(grammar, sentence, params):
    step = grammar.parse(sentence).step

    assert step.intent is StepIntent.CAPTURE_FORM_DATA
    assert step.params == params


def test_named_modal(grammar):
    step = grammar.parse("Verify that the 'Confirmation' modal is visible").step

    assert step.rule_id == 'modal-verify-named-open'
    assert step.intent is StepIntent.VERIFY_VISIBLE
    assert step.target_text == 'Confirmation'
    assert step.target.element_type == 'dialog'


def test_modal_message(grammar):
    step = grammar.parse("Verify modal contains error message 'Field is required'").step

    assert step.intent is StepIntent.VERIFY_CONTAINS
    assert step.expected_value == 'Field is required'
    assert step.target.element_type == 'dialog'


def test_absent_modal_is_still_a_presence_check(grammar):
    assert grammar.parse("Verify the modal does not exist").step.rule_id == 'assert-not-present'


@pytest.mark.parametrize("sentence, helper_class, helper_method", [
    ("Call helper 'CredentialManager.getCurrent'", 'CredentialManager', 'getCurrent'),
    ("Call helper 'reports.ExportHelper.run'", 'reports.ExportHelper', 'run'),
    ("Call helper 'Cleanup'", 'Cleanup', ''),
])
def test_helper_reference_split(grammar, sentence, helper_class, helper_method):
    step = grammar.parse(sentence).step

    assert step.intent is StepIntent.CALL_HELPER
    assert step.params == {'helperClass': helper_class, 'helperMethod': helper_method}


def test_helper_args(grammar):
    step = grammar.parse("""Call helper 'DataHelper.getById' with '["42"]'""").step

    assert step.rule_id == 'orch-call-helper-args'
    assert step.params['helperArgs'] == '["42"]'


def test_helper_context_args(grammar):
    step = grammar.parse("Call helper 'CompareHelper.validate' with context args 'fileData' and 'dbData'").step

    assert step.typed_params() == HelperParams(helper_class='CompareHelper', helper_method='validate',
                                               source_context_var='fileData', target_context_var='dbData')
