"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Slug normalization is pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: services orchestrate IO
      around the pure pieces defined here
"""
