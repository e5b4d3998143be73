"""
Form and modal grammar rules
Capturing form field values and checking modal dialogs
"""
from stepgrammar.grammars.extractors import Q, VERIFY, LiteralRef, mapped
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent

_CAPTURE_FORM = r'^capture\s+(?:all\s+)?(?:the\s+)?form\s+field\s+values?'
_SHOWN = r'\s+is\s+(?:displayed|visible|open|shown)$'

FORM_RULES = [
    # Form capture
    GrammarRule(
        id='form-capture-all',
        pattern=rf'{_CAPTURE_FORM}$',
        category=StepCategory.QUERY,
        intent=StepIntent.CAPTURE_FORM_DATA,
        priority=500,
        extract=mapped(),
        examples=['Capture all form field values', 'Capture the form field values'],
    ),
    GrammarRule(
        id='form-capture-named',
        pattern=rf'{_CAPTURE_FORM}\s+from\s+(?:the\s+)?{Q}\s+(?:section|form|area|panel)$',
        category=StepCategory.QUERY,
        intent=StepIntent.CAPTURE_FORM_DATA,
        priority=501,
        extract=mapped(params={'captureScope': LiteralRef(1)}),
        examples=["Capture form field values from the 'Edit Details' section",
                  "Capture all form field values from the 'Personal Info' form"],
    ),
    GrammarRule(
        id='form-capture-fields',
        pattern=rf'^capture\s+fields?\s+{Q}\s+from\s+(?:the\s+)?(?:form|page|section)$',
        category=StepCategory.QUERY,
        intent=StepIntent.CAPTURE_FORM_DATA,
        priority=502,
        extract=mapped(params={'captureFields': LiteralRef(1)}),
        examples=["Capture fields 'Name, Status, Amount, Date' from the form",
                  "Capture fields 'Username, Email' from the page"],
    ),

    # Modals
    GrammarRule(
        id='modal-verify-open',
        pattern=rf'{VERIFY}(?:the\s+)?modal{_SHOWN}',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_VISIBLE,
        priority=510,
        extract=mapped(element_type='dialog'),
        examples=['Verify the modal is displayed', 'Verify that the modal is visible'],
    ),
    GrammarRule(
        id='modal-verify-named-open',
        pattern=rf'{VERIFY}(?:the\s+)?{Q}\s+modal{_SHOWN}',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_VISIBLE,
        priority=511,
        extract=mapped(target_text=LiteralRef(1), element_type='dialog'),
        examples=["Verify the 'Edit Details' modal is displayed",
                  "Verify that the 'Confirmation' modal is visible"],
    ),
    GrammarRule(
        id='modal-verify-message',
        pattern=rf'{VERIFY}(?:the\s+)?modal\s+contains?\s+(?:error\s+)?message\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_CONTAINS,
        priority=512,
        extract=mapped(expected_value=LiteralRef(1), element_type='dialog'),
        examples=["Verify modal contains error message 'Field is required'",
                  "Verify the modal contains message 'Successfully saved'"],
    ),
    GrammarRule(
        id='modal-capture-data',
        pattern=r'^capture\s+(?:all\s+)?(?:the\s+)?field\s+values?\s+from\s+(?:the\s+)?modal$',
        category=StepCategory.QUERY,
        intent=StepIntent.CAPTURE_FORM_DATA,
        priority=513,
        extract=mapped(params={'captureScope': 'modal'}),
        examples=['Capture all field values from the modal', 'Capture the field values from the modal'],
    ),
]

FORM_TABLE = GrammarTable('form', (500, 549), FORM_RULES)
