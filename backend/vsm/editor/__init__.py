from .card import CardState, IllegalTransition, SectionCard, SyncStatus
from .editor import Notification, SectionEditor

__all__ = [
    "CardState",
    "IllegalTransition",
    "Notification",
    "SectionCard",
    "SectionEditor",
    "SyncStatus",
]
