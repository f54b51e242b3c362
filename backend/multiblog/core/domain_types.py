"""Domain Types — identity types for the User → Project → Post ownership chain.

Invariants:
    - UserId, ProjectId, PostId wrap UUIDs; never mix them in signatures
    - Ownership is transitive: a Post belongs to whoever owns its Project

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
ProjectId = NewType("ProjectId", UUID)
PostId = NewType("PostId", UUID)
