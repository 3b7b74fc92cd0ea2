"""Shared enums for schemas and services."""

from enum import Enum


class RelationshipType(str, Enum):
    """Kind of link between two exercises."""

    PROGRESSION = "progression"  # Related is harder/easier than base
    VARIATION = "variation"
    ALTERNATIVE = "alternative"


class DirectionIndicator(str, Enum):
    """Arrow shown next to a related exercise, seen from the focal one."""

    BOTH = "both"  # ↔
    OUTGOING = "outgoing"  # →
    INCOMING = "incoming"  # ←


class LinkListState(str, Enum):
    """Whether the local link order matches the last committed order."""

    CLEAN = "clean"
    DIRTY = "dirty"
