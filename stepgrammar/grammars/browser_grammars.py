"""
Browser grammar rules
Tabs, browser switching, session resets, frames, native dialogs, cookies and
web storage
"""
from stepgrammar.grammars.extractors import Q, GroupRef, LiteralRef, mapped
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent

_SWITCH = r'^switch\s+to\s+(?:the\s+)?'
_FRAME = r'(?:frame|iframe)'
_NEXT_DIALOG = r'^(?:handle|prepare\s+for|expect)\s+(?:the\s+)?(?:next\s+)?(?:alert|dialog|confirm|prompt)\s+(?:by\s+)?'

BROWSER_RULES = [
    # Tabs
    GrammarRule(
        id='browser-switch-tab-index',
        pattern=r'^switch\s+to\s+tab\s+(\d+)$',
        category=StepCategory.ACTION,
        intent=StepIntent.SWITCH_TAB,
        priority=350,
        extract=mapped(params={'tabIndex': GroupRef(1, convert=int)}),
        examples=['Switch to tab 2', 'Switch to tab 1'],
    ),
    GrammarRule(
        id='browser-switch-tab-latest',
        pattern=rf'{_SWITCH}(?:latest|last|newest|new)\s+tab$',
        category=StepCategory.ACTION,
        intent=StepIntent.SWITCH_TAB,
        priority=351,
        extract=mapped(params={'tabIndex': -1}),
        examples=['Switch to the latest tab', 'Switch to the last tab', 'Switch to the new tab'],
    ),
    GrammarRule(
        id='browser-switch-tab-main',
        pattern=rf'{_SWITCH}(?:main|first|original|primary)\s+tab$',
        category=StepCategory.ACTION,
        intent=StepIntent.SWITCH_TAB,
        priority=352,
        extract=mapped(params={'tabIndex': 0}),
        examples=['Switch to the main tab', 'Switch to the first tab', 'Switch to the original tab'],
    ),
    GrammarRule(
        id='browser-open-new-tab',
        pattern=rf'^open\s+(?:a\s+)?new\s+tab(?:\s+(?:with|to)\s+{Q})?$',
        category=StepCategory.ACTION,
        intent=StepIntent.OPEN_NEW_TAB,
        priority=353,
        extract=mapped(params={'url': LiteralRef(1, optional=True)}),
        examples=['Open a new tab', "Open a new tab with 'https://example.com'",
                  "Open new tab to '/settings'"],
    ),
    GrammarRule(
        id='browser-close-current-tab',
        pattern=r'^close\s+(?:the\s+)?(?:current\s+)?tab$',
        category=StepCategory.ACTION,
        intent=StepIntent.CLOSE_TAB,
        priority=354,
        extract=mapped(),
        examples=['Close the current tab', 'Close tab'],
    ),
    GrammarRule(
        id='browser-close-tab-index',
        pattern=r'^close\s+tab\s+(\d+)$',
        category=StepCategory.ACTION,
        intent=StepIntent.CLOSE_TAB,
        priority=355,
        extract=mapped(params={'tabIndex': GroupRef(1, convert=int)}),
        examples=['Close tab 2', 'Close tab 3'],
    ),

    # Browser and session
    GrammarRule(
        id='browser-switch-browser',
        pattern=rf'{_SWITCH}(chrome|chromium|firefox|webkit|safari|edge)(?:\s+browser)?$',
        category=StepCategory.ACTION,
        intent=StepIntent.SWITCH_BROWSER,
        priority=360,
        extract=mapped(params={'browserType': GroupRef(1, convert=str.lower)}),
        examples=['Switch to Firefox browser', 'Switch to Chrome browser', 'Switch to the Safari browser'],
    ),
    GrammarRule(
        id='browser-clear-session',
        pattern=r'^clear\s+(?:browser\s+)?(?:session|context)(?:\s+(?:for\s+)?re-?authentication)?$',
        category=StepCategory.ACTION,
        intent=StepIntent.CLEAR_SESSION,
        priority=362,
        extract=mapped(),
        examples=['Clear browser session for re-authentication',
                  'Clear browser context for reauthentication', 'Clear session'],
    ),
    GrammarRule(
        id='browser-clear-session-navigate',
        pattern=rf'^clear\s+(?:browser\s+)?(?:session|context)\s+and\s+navigate\s+to\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.CLEAR_SESSION,
        priority=363,
        extract=mapped(params={'loginUrl': LiteralRef(1)}),
        examples=["Clear session and navigate to '/login'",
                  "Clear browser context and navigate to 'https://app.example.com/login'"],
    ),

    # Frames
    GrammarRule(
        id='browser-switch-frame-selector',
        pattern=rf'{_SWITCH}{_FRAME}\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.SWITCH_FRAME,
        priority=365,
        extract=mapped(params={'frameSelector': LiteralRef(1)}),
        examples=["Switch to frame '#payment-iframe'", "Switch to iframe 'content-frame'"],
    ),
    GrammarRule(
        id='browser-switch-frame-named',
        pattern=rf'{_SWITCH}{_FRAME}\s+named\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.SWITCH_FRAME,
        priority=366,
        extract=mapped(params={'frameSelector': LiteralRef(1)}),
        examples=["Switch to frame named 'content'", "Switch to iframe named 'editor'"],
    ),
    GrammarRule(
        id='browser-switch-frame-index',
        pattern=rf'{_SWITCH}{_FRAME}\s+(\d+)$',
        category=StepCategory.ACTION,
        intent=StepIntent.SWITCH_FRAME,
        priority=367,
        extract=mapped(params={'frameSelector': GroupRef(1)}),
        examples=['Switch to frame 1', 'Switch to iframe 0'],
    ),
    GrammarRule(
        id='browser-switch-main-frame',
        pattern=rf'{_SWITCH}(?:main|parent|top|default)\s+(?:frame|content|page)$',
        category=StepCategory.ACTION,
        intent=StepIntent.SWITCH_MAIN_FRAME,
        priority=368,
        extract=mapped(),
        examples=['Switch to main frame', 'Switch to the parent frame', 'Switch to the default content'],
    ),

    # Native dialogs
    GrammarRule(
        id='browser-accept-dialog',
        pattern=r'^(?:accept|ok|close)\s+(?:the\s+)?(?:alert|dialog)$',
        category=StepCategory.ACTION,
        intent=StepIntent.ACCEPT_DIALOG,
        priority=370,
        extract=mapped(params={'dialogAction': 'accept'}),
        examples=['Accept the alert', 'OK the alert', 'Close the dialog', 'Accept the dialog'],
    ),
    GrammarRule(
        id='browser-dismiss-dialog',
        pattern=r'^(?:dismiss|cancel|reject)\s+(?:the\s+)?(?:alert|confirm|dialog|popup)$',
        category=StepCategory.ACTION,
        intent=StepIntent.DISMISS_DIALOG,
        priority=371,
        extract=mapped(params={'dialogAction': 'dismiss'}),
        examples=['Dismiss the alert', 'Cancel the confirm', 'Reject the dialog', 'Dismiss the popup'],
    ),
    GrammarRule(
        id='browser-accept-confirm',
        pattern=r'^(?:accept|confirm|ok)\s+(?:the\s+)?confirm(?:ation)?(?:\s+dialog)?$',
        category=StepCategory.ACTION,
        intent=StepIntent.ACCEPT_DIALOG,
        priority=372,
        extract=mapped(params={'dialogAction': 'accept'}),
        examples=['Accept the confirm dialog', 'Confirm the confirmation', 'OK the confirm'],
    ),
    GrammarRule(
        id='browser-enter-prompt',
        pattern=rf'^(?:enter|type|input)\s+{Q}\s+(?:in|into)\s+(?:the\s+)?prompt(?:\s+(?:dialog|and\s+accept))?$',
        category=StepCategory.ACTION,
        intent=StepIntent.ACCEPT_DIALOG,
        priority=373,
        extract=mapped(params={'dialogAction': 'accept', 'promptText': LiteralRef(1)}, value=LiteralRef(1)),
        examples=["Enter 'John' in the prompt", "Type 'test' into the prompt and accept",
                  "Input 'hello' in the prompt dialog"],
    ),
    GrammarRule(
        id='browser-handle-next-dialog-accept',
        pattern=rf'{_NEXT_DIALOG}accept(?:ing)?$',
        category=StepCategory.ACTION,
        intent=StepIntent.HANDLE_NEXT_DIALOG,
        priority=374,
        extract=mapped(params={'dialogAction': 'accept'}),
        examples=['Handle the next alert by accepting', 'Expect the next dialog accept',
                  'Prepare for the next confirm by accepting'],
    ),
    GrammarRule(
        id='browser-handle-next-dialog-dismiss',
        pattern=rf'{_NEXT_DIALOG}dismiss(?:ing)?$',
        category=StepCategory.ACTION,
        intent=StepIntent.HANDLE_NEXT_DIALOG,
        priority=375,
        extract=mapped(params={'dialogAction': 'dismiss'}),
        examples=['Handle the next alert by dismissing', 'Expect the next confirm by dismissing',
                  'Prepare for the next dialog by dismissing'],
    ),
    GrammarRule(
        id='browser-verify-dialog-text',
        pattern=(r'^(?:verify|assert|check)\s+(?:that\s+)?(?:the\s+)?(?:alert|dialog|confirm|prompt)\s+'
                 rf'(?:text\s+)?(?:is|equals?|contains?|says?|shows?)\s+{Q}$'),
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DIALOG_TEXT,
        priority=376,
        extract=mapped(params={'dialogAction': 'verify'}, expected_value=LiteralRef(1)),
        examples=["Verify the alert text is 'Are you sure?'", "Check the confirm says 'Delete this record?'",
                  "Assert the dialog contains 'Success'"],
    ),

    # Cookies
    GrammarRule(
        id='browser-clear-cookies',
        pattern=r'^clear\s+(?:all\s+)?cookies$',
        category=StepCategory.ACTION,
        intent=StepIntent.CLEAR_COOKIES,
        priority=380,
        extract=mapped(),
        examples=['Clear all cookies', 'Clear cookies'],
    ),
    GrammarRule(
        id='browser-get-cookie',
        pattern=rf'^(?:get|read)\s+(?:the\s+)?cookie\s+{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_COOKIE,
        priority=381,
        extract=mapped(params={'cookieName': LiteralRef(1)}),
        examples=["Get the cookie 'session_token'", "Read the cookie 'auth_token'"],
    ),

    # Web storage
    GrammarRule(
        id='browser-clear-local-storage',
        pattern=r'^clear\s+local\s+storage$',
        category=StepCategory.ACTION,
        intent=StepIntent.CLEAR_STORAGE,
        priority=385,
        extract=mapped(params={'storageType': 'local'}),
        examples=['Clear local storage'],
    ),
    GrammarRule(
        id='browser-clear-session-storage',
        pattern=r'^clear\s+session\s+storage$',
        category=StepCategory.ACTION,
        intent=StepIntent.CLEAR_STORAGE,
        priority=386,
        extract=mapped(params={'storageType': 'session'}),
        examples=['Clear session storage'],
    ),
    GrammarRule(
        id='browser-clear-all-storage',
        pattern=r'^clear\s+(?:all\s+)?storage$',
        category=StepCategory.ACTION,
        intent=StepIntent.CLEAR_STORAGE,
        priority=387,
        extract=mapped(),
        examples=['Clear all storage', 'Clear storage'],
    ),
    GrammarRule(
        id='browser-set-local-storage',
        pattern=rf'^set\s+local\s+storage\s+{Q}\s+to\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.SET_STORAGE_ITEM,
        priority=388,
        extract=mapped(params={'storageType': 'local', 'storageKey': LiteralRef(1)}, value=LiteralRef(2)),
        examples=["Set local storage 'theme' to 'dark'"],
    ),
    GrammarRule(
        id='browser-set-session-storage',
        pattern=rf'^set\s+session\s+storage\s+{Q}\s+to\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.SET_STORAGE_ITEM,
        priority=389,
        extract=mapped(params={'storageType': 'session', 'storageKey': LiteralRef(1)}, value=LiteralRef(2)),
        examples=["Set session storage 'token' to 'abc123'"],
    ),
    GrammarRule(
        id='browser-get-local-storage',
        pattern=rf'^(?:get|read)\s+local\s+storage\s+(?:item\s+)?{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_STORAGE_ITEM,
        priority=390,
        extract=mapped(params={'storageType': 'local', 'storageKey': LiteralRef(1)}),
        examples=["Get local storage item 'theme'", "Read local storage 'userId'"],
    ),
    GrammarRule(
        id='browser-get-session-storage',
        pattern=rf'^(?:get|read)\s+session\s+storage\s+(?:item\s+)?{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_STORAGE_ITEM,
        priority=391,
        extract=mapped(params={'storageType': 'session', 'storageKey': LiteralRef(1)}),
        examples=["Get session storage item 'token'", "Read session storage 'auth'"],
    ),
]

BROWSER_TABLE = GrammarTable('browser', (350, 399), BROWSER_RULES)
