"""Infrastructure Layer — database access, repositories, security, logging.

Invariants:
    - Infrastructure implements the Protocols in core/repository_protocols.py
    - Library exceptions (SQLAlchemy, jose) mapped to core/errors.py types

Design Decisions:
    - Thin adapters over SQLAlchemy / passlib / jose: services stay testable
"""
