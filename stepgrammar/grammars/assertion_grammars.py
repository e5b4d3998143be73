"""
UI assertion grammar rules
Visibility, text, value, attribute, state, count, URL and title checks on page
elements described in free text.

Negative forms sit ahead of their positive counterparts: "is not visible"
would otherwise be read as "<target is not> is visible".
"""
from stepgrammar.grammars.extractors import Q, GroupRef, LiteralRef, mapped, ui_extract
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent

_ASSERT = r'^(?:verify|assert|check|confirm|ensure)\s+(?:that\s+|if\s+|whether\s+)?(?:the\s+)?'


def _comparison(word: str) -> str:
    word = word.lower()
    if word.startswith('contain'):
        return 'contains'
    if word.startswith('match'):
        return 'matches'
    return 'equals'


ASSERTION_RULES = [
    # Page
    GrammarRule(
        id='assert-url',
        pattern=rf'{_ASSERT}(?:page\s+|current\s+)?url\s+(is|equals?|contains?|matches?)\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_URL,
        priority=1000,
        extract=mapped(params={'comparisonOp': GroupRef(1, convert=_comparison)},
                       expected_value=LiteralRef(2)),
        examples=["Verify the URL is '/dashboard'", "Assert the page url contains '/login'"],
    ),
    GrammarRule(
        id='assert-title',
        pattern=rf'{_ASSERT}(?:page\s+)?title\s+(is|equals?|contains?|matches?)\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_TITLE,
        priority=1001,
        extract=mapped(params={'comparisonOp': GroupRef(1, convert=_comparison)},
                       expected_value=LiteralRef(2)),
        examples=["Verify the page title is 'Home - My App'", "Assert title contains 'Dashboard'"],
    ),
    GrammarRule(
        id='assert-count',
        pattern=r'^(?:verify|assert|check|confirm|ensure)\s+(?:that\s+)?'
                r'(?:there\s+are|the\s+count\s+of|the\s+number\s+of)\s+(?:the\s+)?(.+?)\s+'
                r'(?:is|equals?|are)\s+(\d+)$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_COUNT,
        priority=1002,
        extract=ui_extract(1, params={'count': GroupRef(2, convert=int)}),
        examples=['Verify the number of rows is 5', 'Check the count of buttons equals 2',
                  'Assert that the number of search results is 10'],
    ),

    # Values and attributes
    GrammarRule(
        id='assert-attribute',
        pattern=rf'{_ASSERT}(.+?)\s+(?:has\s+)?attribute\s+{Q}\s+(?:equal\s+to|equals?|is|with\s+value)\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_ATTRIBUTE,
        priority=1005,
        extract=ui_extract(1, params={'attribute': LiteralRef(2)}, expected_value=LiteralRef(3)),
        examples=["Verify the link has attribute 'href' equal to '/dashboard'",
                  "Assert the avatar image attribute 'alt' is 'Profile photo'"],
    ),
    GrammarRule(
        id='assert-value',
        pattern=rf'{_ASSERT}(.+?)\s+(?:value\s+(?:is|equals?)|has\s+value)\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_VALUE,
        priority=1006,
        extract=ui_extract(1, expected_value=LiteralRef(2), element_type='input'),
        examples=["Verify the Email field value is 'admin@test.com'",
                  "Assert the input has value '100'"],
    ),

    # Text
    GrammarRule(
        id='assert-not-contains-text',
        pattern=rf"{_ASSERT}(.+?)\s+(?:does\s+not|doesn't)\s+(?:contain|include)\s+(?:the\s+)?(?:text\s+)?{Q}$",
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_NOT_CONTAINS,
        priority=1010,
        extract=ui_extract(1, expected_value=LiteralRef(2)),
        examples=["Verify the message does not contain 'error'",
                  "Assert the list doesn't include 'deleted item'"],
    ),
    GrammarRule(
        id='assert-text-equals',
        pattern=rf'{_ASSERT}(.+?)\s+(?:text\s+)?(?:is|equals?|shows?|reads?|says?|has\s+text)\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_TEXT,
        priority=1011,
        extract=ui_extract(1, expected_value=LiteralRef(2)),
        examples=["Verify the heading text is 'Welcome'", "Assert the title shows 'Dashboard'",
                  "Check the label reads 'Email Address'"],
    ),
    GrammarRule(
        id='assert-contains-text',
        pattern=rf'{_ASSERT}(.+?)\s+(?:contains?|includes?|has)\s+(?:the\s+)?(?:text\s+)?{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_CONTAINS,
        priority=1012,
        extract=ui_extract(1, expected_value=LiteralRef(2)),
        examples=["Verify the message contains 'success'", "Assert the paragraph includes 'updated'",
                  "Check the notification has 'saved'"],
    ),

    # Visibility
    GrammarRule(
        id='assert-not-present',
        pattern=rf"{_ASSERT}(.+?)\s+(?:does\s+not\s+exist|doesn't\s+exist|is\s+not\s+present|is\s+gone"
                rf"|has\s+disappeared)$",
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_NOT_PRESENT,
        priority=1020,
        extract=ui_extract(1),
        examples=['Verify the modal does not exist', 'Check that the alert is gone'],
    ),
    GrammarRule(
        id='assert-not-visible',
        pattern=rf'{_ASSERT}(.+?)\s+(?:is\s+)?(?:hidden|invisible|not\s+displayed|not\s+visible|not\s+shown)$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_HIDDEN,
        priority=1021,
        extract=ui_extract(1),
        examples=['Verify the loading spinner is hidden', 'Assert the error message is not visible',
                  'Check that the popup is not displayed'],
    ),
    GrammarRule(
        id='assert-visible',
        pattern=rf'{_ASSERT}(.+?)\s+(?:is\s+)?(?:visible|displayed|shown|present|appearing)$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_VISIBLE,
        priority=1022,
        extract=ui_extract(1),
        examples=['Verify the Dashboard heading is displayed', 'Assert that the Submit button is visible',
                  'Check the error message is shown'],
    ),

    # State
    GrammarRule(
        id='assert-disabled',
        pattern=rf'{_ASSERT}(.+?)\s+(?:is\s+)?(?:disabled|not\s+enabled|greyed\s+out|grayed\s+out)$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DISABLED,
        priority=1030,
        extract=ui_extract(1),
        examples=['Verify the Delete button is disabled', 'Assert the input is greyed out'],
    ),
    GrammarRule(
        id='assert-enabled',
        pattern=rf'{_ASSERT}(.+?)\s+(?:is\s+)?enabled$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_ENABLED,
        priority=1031,
        extract=ui_extract(1),
        examples=['Verify the Submit button is enabled', 'Assert that the Save link is enabled'],
    ),
    GrammarRule(
        id='assert-unchecked',
        pattern=rf'{_ASSERT}(.+?)\s+(?:is\s+)?(?:unchecked|not\s+checked)$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_UNCHECKED,
        priority=1032,
        extract=ui_extract(1, element_type='checkbox'),
        examples=['Verify the Newsletter checkbox is unchecked', 'Assert opt-in is not checked'],
    ),
    GrammarRule(
        id='assert-checked',
        pattern=rf'{_ASSERT}(.+?)\s+(?:is\s+)?checked$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_CHECKED,
        priority=1033,
        extract=ui_extract(1, element_type='checkbox'),
        examples=['Verify the Remember Me checkbox is checked', 'Assert Terms is checked'],
    ),
]

ASSERTION_TABLE = GrammarTable('assertion', (1000, 1099), ASSERTION_RULES)
