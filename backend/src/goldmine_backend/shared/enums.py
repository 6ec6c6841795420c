"""Shared enumerations used across the backend."""

from enum import StrEnum


class EquipmentKind(StrEnum):
    """Pickaxe tiers a player can own, ordered from weakest to strongest."""

    SILVER = "silver"
    GOLD = "gold"
    DIAMOND = "diamond"
    NETHERITE = "netherite"


class ConfirmationStatus(StrEnum):
    """Advisory status reported for a payment signature."""

    CONFIRMED = "confirmed"
    PROCESSED = "processed"
    UNVERIFIED = "unverified"
    UNKNOWN = "unknown"


class SignaturePosture(StrEnum):
    """How purchase confirmation treats signatures the chain cannot vouch for."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


class PayoutMode(StrEnum):
    """Outcome of a cash-out dispatch attempt."""

    IMMEDIATE = "immediate"
    PENDING = "pending"


class StorageBackend(StrEnum):
    """Persistence substrate selected for player accounts."""

    MEMORY = "memory"
    FILE = "file"
    DATABASE = "database"
