"""ORM Models — SQLAlchemy declarative models for the ownership chain.

Invariants:
    - All models inherit from Base (db/base.py)
    - User owns Projects; Project owns Posts; cascades are storage-level

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from multiblog.models.user import User  # noqa: F401
from multiblog.models.project import Project  # noqa: F401
from multiblog.models.post import Post  # noqa: F401
