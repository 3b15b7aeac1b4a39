"""
Status indicator rule models

A StatusRule tags an element whose literal text equals `text` with
`class_name`. Rules are matched exactly (after stripping surrounding
whitespace); there is no case folding or partial matching.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class StatusRule:
    """
    Exact-text status rule

    Attributes:
        text: Literal text the element must carry
        class_name: Class added to a matching element
        declarations: CSS declarations presenting the class

    Example:
        StatusRule(
            text="IN PRODUCTION",
            class_name="status-in-production",
            declarations={"color": "green !important", "font-weight": "bold"},
        )
    """
    text: str
    class_name: str
    declarations: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)


DEFAULT_STATUS_RULES: List[StatusRule] = [
    StatusRule(
        text="IN PRODUCTION",
        class_name="status-in-production",
        declarations={"color": "green !important", "font-weight": "bold"},
    ),
    StatusRule(
        text="READY FOR PRODUCTION",
        class_name="status-ready-for-production",
        declarations={"color": "orange !important", "font-style": "italic"},
    ),
]
