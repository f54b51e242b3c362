"""Services Layer — ownership, slug allocation, post/project lifecycles, public reads, auth.

Invariants:
    - Services receive repositories and security adapters through __init__
    - Every mutation re-verifies ownership; nothing is cached between calls

Design Decisions:
    - One service per concern for locality; routes stay thin
"""
