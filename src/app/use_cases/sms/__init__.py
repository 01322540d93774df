"""Use cases de sincronização SMS/MMS ↔ CRM."""

from .sync_engine import SyncEngine, default_reference

__all__ = [
    "SyncEngine",
    "default_reference",
]
