"""Unit tests for the structured output of individual grammar tables"""
import json

import pytest

from stepgrammar.grammars.types import StepCategory, StepIntent


@pytest.mark.parametrize("sentence, rule_id, params", [
    ("Go back", 'nav-go-back', {'navigationAction': 'back'}),
    ("Navigate to https://example.com", 'nav-goto-url-unquoted', {'url': 'https://example.com'}),
    ("Generate a random number between 1 and 100", 'data-generate-random-number',
     {'dataType': 'random-number', 'rangeMin': 1, 'rangeMax': 100}),
    ("Generate a random number", 'data-generate-random-number', {'dataType': 'random-number'}),
    ("Generate a random string", 'data-generate-random-string', {'dataType': 'random-string'}),
    ("Generate random decimal between '0.01' and '99.99' with '2' decimal places", 'ctx-generate-decimal',
     {'dataType': 'random-decimal', 'rangeMin': 0.01, 'rangeMax': 99.99, 'decimalPlaces': 2}),
    ("Verify context 'beforeData' matches context 'afterData' except 'timestamp, modifiedBy'",
     'cmp-context-match-except',
     {'sourceContextVar': 'beforeData', 'targetContextVar': 'afterData', 'exceptFields': 'timestamp, modifiedBy'}),
    ("Verify context 'dbValues' matches context 'uiValues' with tolerance '0.001'", 'cmp-context-match-tolerance',
     {'sourceContextVar': 'dbValues', 'targetContextVar': 'uiValues', 'tolerance': 0.001}),
    ("Send a POST request to '/api/ping'", 'api-request-method-body',
     {'httpMethod': 'POST', 'apiUrl': '/api/ping'}),
    ("""Send POST request to '/api/users' with body '{"name":"John"}'""", 'api-request-post-body',
     {'httpMethod': 'POST', 'apiUrl': '/api/users', 'requestBody': '{"name":"John"}'}),
    ("Poll API '/api/exports/9' until '$.ready' is 'true'", 'api-poll-until',
     {'apiUrl': '/api/exports/9', 'httpMethod': 'GET', 'apiPollField': '$.ready', 'apiPollExpected': 'true'}),
    ("Poll API '/api/jobs/123' until '$.status' equals 'completed' every 2000 ms max 60000 ms", 'api-poll-until',
     {'apiUrl': '/api/jobs/123', 'httpMethod': 'GET', 'apiPollField': '$.status',
      'apiPollExpected': 'completed', 'apiPollInterval': 2000, 'apiPollMaxTime': 60000}),
    ("Wait 5 seconds", 'action-wait-seconds', {'timeout': 5000}),
    ("Wait 250ms", 'action-wait-seconds', {'timeout': 250}),
    ("Scroll down", 'action-scroll-direction', {'direction': 'down'}),
    ("Press Control+Shift+Delete", 'action-press-key-combo', {'key': 'Control+Shift+Delete'}),
    ("Press the Tab key", 'action-press-key', {'key': 'Tab'}),
    ("Verify the URL contains '/dashboard'", 'assert-url', {'comparisonOp': 'contains'}),
    ("Verify the page title is 'Home'", 'assert-title', {'comparisonOp': 'equals'}),
    ("Verify the number of rows is 5", 'assert-count', {'count': 5}),
    ("Get the URL parameter 'id'", 'query-get-url-param', {'urlParam': 'id'}),
])
def test_params(grammar, sentence, rule_id, params):
    result = grammar.parse(sentence)

    assert result.matched, sentence
    assert result.step.rule_id == rule_id
    assert result.step.params == params


def test_api_key_auth_is_json(grammar):
    step = grammar.parse("Set API auth apikey 'abc123' in header 'X-API-Key'").step

    assert step.intent is StepIntent.API_SET_AUTH
    assert step.params['apiAuthType'] == 'apikey'
    assert json.loads(step.params['apiAuthParams']) == {
        'key': 'abc123', 'location': 'header', 'paramName': 'X-API-Key'
    }


def test_api_header_value(grammar):
    step = grammar.parse("Set API header 'Content-Type' to 'application/json'").step

    assert step.params == {'attribute': 'Content-Type'}
    assert step.value == 'application/json'


def test_row_scoped_typing(grammar):
    step = grammar.parse("Type 'Approved' in the Status field at row 2 of the Orders table").step

    assert step.rule_id == 'action-table-type'
    assert step.intent is StepIntent.FILL
    assert step.value == 'Approved'
    assert step.target_text == 'Status'
    assert step.target.element_type == 'input'
    assert step.params == {'rowIndex': 2, 'tableRef': 'Orders'}


def test_plain_typing(grammar):
    step = grammar.parse("Type 'admin' into the Username field").step

    assert step.rule_id == 'action-type-value-in-target'
    assert step.value == 'admin'
    assert step.target_text == 'Username'


def test_select_from_dropdown(grammar):
    step = grammar.parse("Select 'United States' from the Country dropdown").step

    assert step.intent is StepIntent.SELECT
    assert step.value == 'United States'
    assert step.target_text == 'Country'
    assert step.target.element_type == 'dropdown'


def test_drag_target(grammar):
    step = grammar.parse("Drag the card to the Done column").step

    assert step.intent is StepIntent.DRAG
    assert step.target_text == 'card'
    assert step.params == {'dropTarget': 'Done column'}


def test_negative_assertions_come_first(grammar):
    hidden = grammar.parse("Verify the error message is not visible").step
    disabled = grammar.parse("Verify the Delete button is not enabled").step
    unchecked = grammar.parse("Verify the Newsletter checkbox is not checked").step

    assert hidden.intent is StepIntent.VERIFY_HIDDEN
    assert hidden.target_text == 'error message'
    assert disabled.intent is StepIntent.VERIFY_DISABLED
    assert unchecked.intent is StepIntent.VERIFY_UNCHECKED


def test_wait_until_gone_is_negated(grammar):
    step = grammar.parse("Wait for the spinner to disappear").step

    assert step.params == {'waitState': 'hidden'}
    assert step.modifiers.negated
    assert step.to_dict()['modifiers'] == {'negated': True}


def test_force_click(grammar):
    step = grammar.parse("Force click the hidden Export button").step

    assert step.intent is StepIntent.CLICK
    assert step.modifiers.force
    assert step.target_text == 'hidden Export'


def test_clear_field_does_not_swallow_context(grammar):
    assert grammar.parse("Clear context 'tempData'").step.rule_id == 'ctx-clear-var'
    assert grammar.parse("Clear the search field").step.rule_id == 'action-clear-field'


def test_query_attribute(grammar):
    step = grammar.parse("Get the 'href' attribute from the Home link").step

    assert step.category is StepCategory.QUERY
    assert step.intent is StepIntent.GET_ATTRIBUTE
    assert step.params == {'attribute': 'href'}
    assert step.target_text == 'Home'
    assert step.target.element_type == 'link'


def test_how_many_question(grammar):
    step = grammar.parse("How many rows are there?").step

    assert step.intent is StepIntent.GET_COUNT
    assert step.target_text == 'rows'


def test_database_verify_field_tolerance(grammar):
    step = grammar.parse("Verify database field 'amount' equals '100.50' within tolerance '0.01' "
                         "in 'PRIMARY_DB' query 'GET_TOTAL'").step

    assert step.intent is StepIntent.VERIFY_DB_FIELD
    assert step.params['dbAlias'] == 'PRIMARY_DB'
    assert step.params['dbQuery'] == 'GET_TOTAL'
    assert step.params['dbField'] == 'amount'
    assert step.params['tolerance'] == 0.01
    assert 'dbParams' not in step.params
