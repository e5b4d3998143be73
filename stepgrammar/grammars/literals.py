"""
Literal references
Capture groups in grammar patterns hold literal slot numbers, not literal text.
Literals resolves those slot numbers with bounds checking and default substitution.
"""
import re
from typing import List, Optional, Sequence

from stepgrammar.parser.quoted_extractor import PLACEHOLDER_PATTERN


class Literals:
    """The literal list of one sentence, resolved through capture groups"""

    def __init__(self, values: Sequence[str]):
        self.values = tuple(values)
        self.unresolved: List[str] = []

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> str:
        return self.values[index]

    def slot(self, index: int, default: str = '') -> str:
        """Literal by slot number, default when the slot does not exist"""
        if 0 <= index < len(self.values):
            return self.values[index]
        self.unresolved.append(f"slot {index} of {len(self.values)}")
        return default

    def resolve(self, match: re.Match, group: int, default: str = '') -> str:
        """Literal referenced by a capture group, default when it cannot be resolved"""
        raw = _group(match, group)
        if raw is None:
            self.unresolved.append(f"group {group} did not capture")
            return default
        try:
            index = int(raw)
        except ValueError:
            self.unresolved.append(f"group {group} captured {raw!r}")
            return default
        return self.slot(index, default)

    def optional(self, match: re.Match, group: int) -> Optional[str]:
        """Like resolve, but None when the group did not take part in the match"""
        if _group(match, group) is None:
            return None
        return self.resolve(match, group)

    def substitute(self, text: str) -> str:
        """Replace placeholders in free text with their literal content"""
        return PLACEHOLDER_PATTERN.sub(lambda m: self.slot(int(m.group(1))), text)


def _group(match: re.Match, group: int) -> Optional[str]:
    if group < 0 or group > match.re.groups:
        return None
    return match.group(group)
