"""Shared enums, value objects and audit primitives for the backend."""

from goldmine_backend.shared.enums import (
    ConfirmationStatus,
    EquipmentKind,
    PayoutMode,
    SignaturePosture,
    StorageBackend,
)
from goldmine_backend.shared.events import AuditEvent, AuditEventType
from goldmine_backend.shared.value_objects import Checkpoint, PayoutRecord

__all__ = [
    "AuditEvent",
    "AuditEventType",
    "Checkpoint",
    "ConfirmationStatus",
    "EquipmentKind",
    "PayoutMode",
    "PayoutRecord",
    "SignaturePosture",
    "StorageBackend",
]
