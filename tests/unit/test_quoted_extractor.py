"""Unit tests for quoted literal extraction"""
import pytest
from stepgrammar.parser.quoted_extractor import (
    Literal, extract_quoted, resolve_placeholders, restore_quoted
)


def test_single_and_double_quotes():
    quoted = extract_quoted("""Type 'admin' into the "User name" field""")

    assert quoted.normalized == "Type __QUOTED_0__ into the __QUOTED_1__ field"
    assert quoted.values == ['admin', 'User name']
    assert quoted.literals[1].quote == '"'


def test_mixed_styles_nest():
    quoted = extract_quoted("""Query database 'PRIMARY_DB' with 'GET_BY_CODE' params '["A100"]'""")

    assert quoted.values == ['PRIMARY_DB', 'GET_BY_CODE', '["A100"]']
    assert quoted.normalized == "Query database __QUOTED_0__ with __QUOTED_1__ params __QUOTED_2__"


def test_apostrophe_inside_word_is_text():
    quoted = extract_quoted("Verify the list doesn't include 'deleted item'")

    assert quoted.values == ['deleted item']
    assert "doesn't" in quoted.normalized


def test_empty_quotes_give_empty_literal():
    quoted = extract_quoted("Set variable 'blank' to ''")

    assert quoted.values == ['blank', '']
    assert quoted.normalized == "Set variable __QUOTED_0__ to __QUOTED_1__"


def test_unterminated_quote_keeps_rest_of_line():
    quoted = extract_quoted("Click 'Save and then 'Cancel")

    assert quoted.values == ['Save and then ']
    assert quoted.normalized == "Click __QUOTED_0__Cancel"

    orphan = extract_quoted("Click the 'Save button")
    assert orphan.values == []
    assert orphan.normalized == "Click the 'Save button"


def test_no_quotes():
    quoted = extract_quoted("Reload the page")

    assert quoted.normalized == "Reload the page"
    assert quoted.literals == []


@pytest.mark.parametrize("sentence", [
    "Click the 'Submit' button",
    """Send POST request to '/api/users' with body '{"name":"John"}'""",
    "Verify the message doesn't contain \"error\"",
    "Set context 'x' to ''",
    "Click 'unterminated",
])
def test_restore_gives_back_the_sentence(sentence):
    quoted = extract_quoted(sentence)

    assert restore_quoted(quoted.normalized, quoted.literals) == sentence


def test_restore_leaves_unknown_placeholders():
    assert restore_quoted("Click __QUOTED_3__", [Literal(0, 'x')]) == "Click __QUOTED_3__"


def test_resolve_placeholders_uses_bare_text():
    assert resolve_placeholders("the __QUOTED_0__ link near __QUOTED_1__", ['Home', 'footer']) == \
        "the Home link near footer"
    assert resolve_placeholders("the __QUOTED_5__ link", ['Home']) == "the  link"
