"""Enumerations used throughout the table reconciler."""

from enum import StrEnum


class TableStatus(StrEnum):
    """Lifecycle status reported by DescribeTable."""

    CREATING = "CREATING"
    UPDATING = "UPDATING"
    DELETING = "DELETING"
    ACTIVE = "ACTIVE"
    INACCESSIBLE_ENCRYPTION_CREDENTIALS = "INACCESSIBLE_ENCRYPTION_CREDENTIALS"
    ARCHIVING = "ARCHIVING"
    ARCHIVED = "ARCHIVED"


class SSEStatus(StrEnum):
    """Server-side encryption status."""

    ENABLING = "ENABLING"
    ENABLED = "ENABLED"
    DISABLING = "DISABLING"
    DISABLED = "DISABLED"
    UPDATING = "UPDATING"


class BillingMode(StrEnum):
    """How read and write throughput is charged."""

    PROVISIONED = "PROVISIONED"
    PAY_PER_REQUEST = "PAY_PER_REQUEST"


class Condition(StrEnum):
    """Readiness condition set on a managed table."""

    CREATING = "Creating"
    DELETING = "Deleting"
    AVAILABLE = "Available"
    UNAVAILABLE = "Unavailable"
    UNKNOWN = "Unknown"


class TagPrecedence(StrEnum):
    """Which side wins when owner and system tags share a key."""

    SYSTEM = "system"
    OWNER = "owner"
