"""
UI action grammar rules
Clicking, typing, selecting, keyboard, upload, drag, wait and checkbox steps on
elements described in free text.

Row-scoped table actions come first so the row and table context is captured
before the general click/type/select patterns see the sentence.
"""
import re
from dataclasses import dataclass

from stepgrammar.grammars.extractors import Q, GroupRef, LiteralRef, TargetRef, mapped, ui_extract
from stepgrammar.grammars.literals import Literals
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent, StepModifiers

_TYPE = r'^(?:type|enter|fill|input|write)\s+'
_SELECT = r'^(?:select|pick|choose)\s+(?:the\s+)?(?:option\s+)?'
_ROW = r'\s+(?:at|in|on)\s+row\s+(?:number\s+)?(\d+)\s+(?:in|of)\s+(?:the\s+)?(.+?)$'
_MODIFIER_KEY = r'(?:ctrl|control|alt|shift|meta|cmd|command)'
_WAIT = r'^wait\s+(?:for\s+)?(?:the\s+)?'


@dataclass(frozen=True)
class _Milliseconds:
    """Duration in milliseconds from an amount group and a unit group"""
    amount: int
    unit: int

    def read(self, match: re.Match, literals: Literals) -> int:
        amount = int(match.group(self.amount))
        unit = match.group(self.unit).lower()
        if unit.startswith('ms') or unit.startswith('milli'):
            return amount
        return amount * 1000


def _row(row_group: int, table_group: int) -> dict:
    return {'rowIndex': GroupRef(row_group, convert=int), 'tableRef': TargetRef(table_group)}


def _shortcut(key: str) -> dict:
    return {'key': key}


ACTION_RULES = [
    # Row-scoped table actions
    GrammarRule(
        id='action-table-type',
        pattern=rf'{_TYPE}{Q}\s+(?:in|into)\s+(?:the\s+)?(.+?){_ROW}',
        category=StepCategory.ACTION,
        intent=StepIntent.FILL,
        priority=1100,
        extract=ui_extract(2, params=_row(3, 4), value=LiteralRef(1), element_type='input'),
        examples=["Type 'Approved' in the Status field at row 2 of the Orders table",
                  "Enter '15' into the Quantity input in row number 3 of the Cart grid"],
    ),
    GrammarRule(
        id='action-table-clear',
        pattern=rf'^(?:clear|empty|erase)\s+(?:the\s+)?(?:text\s+in\s+)?(?:the\s+)?(.+?){_ROW}',
        category=StepCategory.ACTION,
        intent=StepIntent.CLEAR,
        priority=1101,
        extract=ui_extract(1, params=_row(2, 3), element_type='input'),
        examples=['Clear the Notes input in row 3 of the Tasks grid',
                  'Clear the text in the Comment field at row 1 of the Reviews table'],
    ),
    GrammarRule(
        id='action-table-click',
        pattern=rf'^click\s+(?:on\s+)?(?:the\s+)?(.+?){_ROW}',
        category=StepCategory.ACTION,
        intent=StepIntent.CLICK,
        priority=1102,
        extract=ui_extract(1, params=_row(2, 3)),
        examples=['Click the Edit button on row 1 of the Users table',
                  'Click on the Delete link at row 4 of the Orders grid'],
    ),
    GrammarRule(
        id='action-table-select',
        pattern=rf'{_SELECT}{Q}\s+(?:option\s+)?(?:from|in)\s+(?:the\s+)?(.+?){_ROW}',
        category=StepCategory.ACTION,
        intent=StepIntent.SELECT,
        priority=1103,
        extract=ui_extract(2, params=_row(3, 4), value=LiteralRef(1), element_type='dropdown'),
        examples=["Select 'High' from the Priority dropdown at row 4 of the Tickets table"],
    ),

    # Clicks
    GrammarRule(
        id='action-click-basic',
        pattern=r'^click\s+(?:on\s+)?(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.CLICK,
        priority=1110,
        extract=ui_extract(1),
        examples=['Click the Submit button', 'Click on the Login link', "Click 'Save changes'"],
    ),
    GrammarRule(
        id='action-double-click',
        pattern=r'^double[\s-]?click\s+(?:on\s+)?(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.DOUBLE_CLICK,
        priority=1111,
        extract=ui_extract(1),
        examples=['Double click on the row', 'Double-click the cell'],
    ),
    GrammarRule(
        id='action-right-click',
        pattern=r'^right[\s-]?click\s+(?:on\s+)?(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.RIGHT_CLICK,
        priority=1112,
        extract=ui_extract(1),
        examples=['Right click on the item', 'Right-click the row'],
    ),
    GrammarRule(
        id='action-force-click',
        pattern=r'^force[\s-]?click\s+(?:on\s+)?(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.CLICK,
        priority=1113,
        extract=ui_extract(1, modifiers=StepModifiers(force=True)),
        examples=['Force click the hidden Export button', 'Force-click on the overlay'],
    ),

    # Typing
    GrammarRule(
        id='action-type-value-in-target',
        pattern=rf'{_TYPE}{Q}\s+(?:in|into|on)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.FILL,
        priority=1120,
        extract=ui_extract(2, value=LiteralRef(1), element_type='input'),
        examples=["Type 'admin' into the Username field", "Enter 'secret' in the Password input"],
    ),
    GrammarRule(
        id='action-type-in-target-value',
        pattern=rf'{_TYPE}(?:in|into)\s+(?:the\s+)?(.+?)\s+(?:the\s+)?(?:value|text)\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.FILL,
        priority=1121,
        extract=ui_extract(1, value=LiteralRef(2), element_type='input'),
        examples=["Type in the search field the value 'test query'"],
    ),
    GrammarRule(
        id='action-type-target-with-value',
        pattern=rf'{_TYPE}(?:the\s+)?(.+?)\s+(?:with|as)\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.FILL,
        priority=1122,
        extract=ui_extract(1, value=LiteralRef(2), element_type='input'),
        examples=["Fill the Username field with 'admin'", "Enter the Email as 'jane@example.com'"],
    ),
    GrammarRule(
        id='action-clear-field',
        pattern=r'^(?:clear|empty|erase)\s+(?:the\s+)?'
                r'(?!(?:browser\s+)?(?:session|context|cookies?|local\s+storage|session\s+storage|'
                r'all\s+storage|storage)\b)(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.CLEAR,
        priority=1125,
        extract=ui_extract(1, element_type='input'),
        examples=['Clear the search field', 'Clear the Email input'],
    ),

    # Selection
    GrammarRule(
        id='action-select-option-from',
        pattern=rf'{_SELECT}{Q}\s+(?:option\s+)?from\s+(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.SELECT,
        priority=1130,
        extract=ui_extract(2, value=LiteralRef(1), element_type='dropdown'),
        examples=["Select 'United States' from the Country dropdown",
                  "Choose option 'Blue' from the Color select"],
    ),
    GrammarRule(
        id='action-select-option-in',
        pattern=rf'{_SELECT}{Q}\s+(?:option\s+)?(?:in|on)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.SELECT,
        priority=1131,
        extract=ui_extract(2, value=LiteralRef(1), element_type='dropdown'),
        examples=["Select the option 'Yes' in the Confirmation dropdown"],
    ),

    # Pointer and scrolling
    GrammarRule(
        id='action-hover',
        pattern=r'^(?:hover|mouse\s*over)\s+(?:over\s+)?(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.HOVER,
        priority=1140,
        extract=ui_extract(1),
        examples=['Hover over the Profile menu', 'Hover the Settings icon',
                  'Mouse over the tooltip trigger'],
    ),
    GrammarRule(
        id='action-scroll-to',
        pattern=r'^scroll\s+(?:to|until)\s+(?:the\s+)?(.+?)(?:\s+is\s+visible)?$',
        category=StepCategory.ACTION,
        intent=StepIntent.SCROLL_TO,
        priority=1141,
        extract=ui_extract(1),
        examples=['Scroll to the footer', 'Scroll until the Submit button is visible'],
    ),
    GrammarRule(
        id='action-scroll-direction',
        pattern=r'^scroll\s+(up|down|left|right)(?:\s+(?:the\s+)?(.+?))?$',
        category=StepCategory.ACTION,
        intent=StepIntent.SCROLL,
        priority=1142,
        extract=ui_extract(2, params={'direction': GroupRef(1, convert=str.lower)}),
        examples=['Scroll down', 'Scroll up the list', 'Scroll down the page'],
    ),
    GrammarRule(
        id='action-focus',
        pattern=r'^(?:focus|set\s+focus)\s+(?:on\s+|to\s+)?(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.FOCUS,
        priority=1143,
        extract=ui_extract(1),
        examples=['Focus on the Email field', 'Set focus to the search input'],
    ),

    # Keyboard
    GrammarRule(
        id='action-press-key-combo',
        pattern=rf'^press\s+({_MODIFIER_KEY}(?:\s*\+\s*(?:{_MODIFIER_KEY}|[a-z0-9]+))+)'
                r'(?:\s+(?:on|in)\s+(?:the\s+)?(.+?))?$',
        category=StepCategory.ACTION,
        intent=StepIntent.PRESS_KEY,
        priority=1150,
        extract=ui_extract(2, params={'key': GroupRef(1)}),
        examples=['Press Ctrl+A', 'Press Control+Shift+Delete', 'Press Ctrl+C on the text field'],
    ),
    GrammarRule(
        id='action-press-key-on',
        pattern=r'^press\s+(?:the\s+)?(.+?)\s+(?:key\s+)?(?:on|in)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.PRESS_KEY,
        priority=1151,
        extract=ui_extract(2, params={'key': GroupRef(1)}),
        examples=['Press Enter on the search field', 'Press the Tab key on the username input'],
    ),
    GrammarRule(
        id='action-press-key',
        pattern=r'^press\s+(?:the\s+)?(?:key\s+)?(.+?)(?:\s+key)?$',
        category=StepCategory.ACTION,
        intent=StepIntent.PRESS_KEY,
        priority=1152,
        extract=mapped(params={'key': GroupRef(1)}),
        examples=['Press Enter', 'Press the Tab key', 'Press Escape'],
    ),
    GrammarRule(
        id='action-select-all-text',
        pattern=r'^select\s+all\s+(?:text|content)$',
        category=StepCategory.ACTION,
        intent=StepIntent.PRESS_KEY,
        priority=1155,
        extract=mapped(params=_shortcut('Control+a')),
        examples=['Select all text', 'Select all content'],
    ),
    GrammarRule(
        id='action-copy-text',
        pattern=r'^copy(?:\s+(?:the\s+)?(?:text|content|selection))?$',
        category=StepCategory.ACTION,
        intent=StepIntent.PRESS_KEY,
        priority=1156,
        extract=mapped(params=_shortcut('Control+c')),
        examples=['Copy', 'Copy the text', 'Copy the selection'],
    ),
    GrammarRule(
        id='action-paste',
        pattern=r'^paste(?:\s+(?:the\s+)?(?:text|content|clipboard))?$',
        category=StepCategory.ACTION,
        intent=StepIntent.PRESS_KEY,
        priority=1157,
        extract=mapped(params=_shortcut('Control+v')),
        examples=['Paste', 'Paste the text', 'Paste the clipboard'],
    ),
    GrammarRule(
        id='action-cut',
        pattern=r'^cut(?:\s+(?:the\s+)?(?:text|content|selection))?$',
        category=StepCategory.ACTION,
        intent=StepIntent.PRESS_KEY,
        priority=1158,
        extract=mapped(params=_shortcut('Control+x')),
        examples=['Cut', 'Cut the text', 'Cut the selection'],
    ),
    GrammarRule(
        id='action-undo',
        pattern=r'^undo$',
        category=StepCategory.ACTION,
        intent=StepIntent.PRESS_KEY,
        priority=1159,
        extract=mapped(params=_shortcut('Control+z')),
        examples=['Undo'],
    ),
    GrammarRule(
        id='action-redo',
        pattern=r'^redo$',
        category=StepCategory.ACTION,
        intent=StepIntent.PRESS_KEY,
        priority=1160,
        extract=mapped(params=_shortcut('Control+y')),
        examples=['Redo'],
    ),

    # Files and drag
    GrammarRule(
        id='action-upload',
        pattern=rf'^upload\s+(?:the\s+)?(?:file\s+)?{Q}\s+(?:to|in|into|on)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.UPLOAD,
        priority=1163,
        extract=ui_extract(2, params={'filePath': LiteralRef(1)}, element_type='button'),
        examples=["Upload the file 'test.pdf' to the file input",
                  "Upload 'avatar.png' to the Profile Picture field"],
    ),
    GrammarRule(
        id='action-upload-multiple',
        pattern=rf'^upload\s+files\s+{Q}\s+(?:to|in|into|on)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.UPLOAD,
        priority=1164,
        extract=ui_extract(2, params={'filePath': LiteralRef(1)}, element_type='button'),
        examples=["Upload files 'invoice.pdf, receipt.pdf' to the Attachments input"],
    ),
    GrammarRule(
        id='action-drag-to',
        pattern=r'^drag\s+(?:and\s+drop\s+)?(?:the\s+)?(.+?)\s+(?:to|onto|into)\s+(?:the\s+)?(.+?)$',
        category=StepCategory.ACTION,
        intent=StepIntent.DRAG,
        priority=1165,
        extract=ui_extract(1, params={'dropTarget': TargetRef(2)}),
        examples=['Drag the card to the Done column', 'Drag Item 1 onto the trash',
                  'Drag and drop the Report widget into the Dashboard panel'],
    ),

    # Waits
    GrammarRule(
        id='action-wait-for-element',
        pattern=rf'{_WAIT}(.+?)\s+(?:to\s+)?(?:be\s+)?(?:visible|displayed|shown|appear)$',
        category=StepCategory.ACTION,
        intent=StepIntent.WAIT_FOR,
        priority=1170,
        extract=ui_extract(1, params={'waitState': 'visible'}),
        examples=['Wait for the loading spinner to be visible', 'Wait for the dashboard to appear'],
    ),
    GrammarRule(
        id='action-wait-for-element-gone',
        pattern=rf'{_WAIT}(.+?)\s+(?:to\s+)?(?:be\s+)?(?:hidden|gone|disappear|removed)$',
        category=StepCategory.ACTION,
        intent=StepIntent.WAIT_FOR,
        priority=1171,
        extract=ui_extract(1, params={'waitState': 'hidden'}, modifiers=StepModifiers(negated=True)),
        examples=['Wait for the spinner to disappear', 'Wait for the loading overlay to be hidden'],
    ),
    GrammarRule(
        id='action-wait-seconds',
        pattern=r'^(?:wait|pause)\s+(?:for\s+)?(\d+)\s*(seconds?|secs?|milliseconds?|ms)$',
        category=StepCategory.ACTION,
        intent=StepIntent.WAIT_SECONDS,
        priority=1172,
        extract=mapped(params={'timeout': _Milliseconds(1, 2)}),
        examples=['Wait 5 seconds', 'Pause for 3 seconds', 'Wait 500 milliseconds', 'Wait 2 secs',
                  'Wait 250ms'],
    ),
    GrammarRule(
        id='action-wait-url-contain',
        pattern=rf'{_WAIT}url\s+to\s+(?:contain|include|have)\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.WAIT_URL_CHANGE,
        priority=1173,
        extract=mapped(params={'url': LiteralRef(1)}),
        examples=["Wait for URL to contain '/dashboard'", "Wait for the URL to include '/home'"],
    ),
    GrammarRule(
        id='action-wait-url-change',
        pattern=rf'{_WAIT}url\s+to\s+change$',
        category=StepCategory.ACTION,
        intent=StepIntent.WAIT_URL_CHANGE,
        priority=1174,
        extract=mapped(),
        examples=['Wait for the URL to change', 'Wait for URL to change'],
    ),
    GrammarRule(
        id='action-wait-text-to-be',
        pattern=rf'{_WAIT}(.+?)\s+(?:text\s+)?to\s+(?:be|equal|show|read)\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.WAIT_TEXT_CHANGE,
        priority=1175,
        extract=ui_extract(1, expected_value=LiteralRef(2)),
        examples=["Wait for the heading text to be 'Welcome'", "Wait for the status to show 'Complete'"],
    ),
    GrammarRule(
        id='action-wait-text-change',
        pattern=rf'{_WAIT}(.+?)\s+(?:text\s+)?to\s+change$',
        category=StepCategory.ACTION,
        intent=StepIntent.WAIT_TEXT_CHANGE,
        priority=1176,
        extract=ui_extract(1),
        examples=['Wait for the status text to change', 'Wait for the counter to change'],
    ),
    GrammarRule(
        id='action-wait-domcontentloaded',
        pattern=rf'{_WAIT}(?:dom\s+content\s+loaded|domcontentloaded|dom\s+(?:to\s+)?(?:be\s+)?(?:loaded|ready))$',
        category=StepCategory.ACTION,
        intent=StepIntent.WAIT_PAGE_LOAD,
        priority=1177,
        extract=mapped(params={'waitState': 'domcontentloaded'}),
        examples=['Wait for DOM content loaded', 'Wait for the DOM to be ready', 'Wait for domcontentloaded'],
    ),
    GrammarRule(
        id='action-wait-page-load',
        pattern=rf'{_WAIT}(?:page\s+(?:to\s+)?(?:be\s+)?(?:loaded|load|complete|ready)|full\s+page\s+load'
                r'|page\s+load\s+complete)$',
        category=StepCategory.ACTION,
        intent=StepIntent.WAIT_PAGE_LOAD,
        priority=1178,
        extract=mapped(params={'waitState': 'load'}),
        examples=['Wait for the page to load', 'Wait for page to be loaded', 'Wait for full page load'],
    ),
    GrammarRule(
        id='action-wait-network-idle',
        pattern=rf'{_WAIT}(?:network\s+(?:to\s+)?(?:be\s+)?idle|network\s*idle'
                r'|no\s+(?:more\s+)?network\s+(?:activity|requests))$',
        category=StepCategory.ACTION,
        intent=StepIntent.WAIT_PAGE_LOAD,
        priority=1179,
        extract=mapped(params={'waitState': 'networkidle'}),
        examples=['Wait for network idle', 'Wait for the network to be idle',
                  'Wait for no more network requests'],
    ),

    # Checkboxes and switches
    GrammarRule(
        id='action-check',
        pattern=r'^(?:check|mark|tick)\s+(?:the\s+)?(?!(?:if|that|whether)\b)'
                r'(?!__QUOTED_\d+__\s+(?:is\s+)?(?:displayed|shown|visible|present|available)\b)'
                r'(.+?)(?:\s+checkbox)?$',
        category=StepCategory.ACTION,
        intent=StepIntent.CHECK,
        priority=1190,
        extract=ui_extract(1, element_type='checkbox'),
        examples=['Check the "Remember Me" checkbox', 'Check the Terms checkbox', 'Tick the agreement'],
    ),
    GrammarRule(
        id='action-uncheck',
        pattern=r'^(?:uncheck|untick|unmark|deselect)\s+(?:the\s+)?(.+?)(?:\s+checkbox)?$',
        category=StepCategory.ACTION,
        intent=StepIntent.UNCHECK,
        priority=1191,
        extract=ui_extract(1, element_type='checkbox'),
        examples=['Uncheck the "Remember Me" checkbox', 'Untick the newsletter'],
    ),
    GrammarRule(
        id='action-toggle',
        pattern=r'^toggle\s+(?:the\s+)?(.+?)(?:\s+(?:switch|toggle))?$',
        category=StepCategory.ACTION,
        intent=StepIntent.TOGGLE,
        priority=1192,
        extract=ui_extract(1, element_type='switch'),
        examples=['Toggle the Dark Mode switch', 'Toggle notifications'],
    ),
]

ACTION_TABLE = GrammarTable('action', (1100, 1199), ACTION_RULES)
