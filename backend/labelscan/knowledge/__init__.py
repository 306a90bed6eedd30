from .safety_knowledge_base import (
    DEFAULT_RECORD,
    SAFETY_TABLE,
    MatchKind,
    SafetyKnowledgeBase,
    get_knowledge_base,
)

__all__ = [
    "DEFAULT_RECORD",
    "SAFETY_TABLE",
    "MatchKind",
    "SafetyKnowledgeBase",
    "get_knowledge_base",
]
