"""
Models package for fusemods

Contains data structures and type definitions for decoding and the CLI pipeline.
"""

from .state import ProgramState, pipeline
from .codes import CodeEntry, CodeKind, CodeToken, Segment, StyleState, TextToken, Token
from .status import DEFAULT_STATUS_RULES, StatusRule

__all__ = [
    "ProgramState",
    "pipeline",
    "CodeEntry",
    "CodeKind",
    "CodeToken",
    "Segment",
    "StyleState",
    "TextToken",
    "Token",
    "DEFAULT_STATUS_RULES",
    "StatusRule",
]
