"""Services Layer — the imperative shell around core/ rules.

Invariants:
    - Services receive an AsyncSession explicitly (no ambient state)
    - Every mutation runs its ownership check before touching the store

Design Decisions:
    - Read side (post_queries) split from write side (post_lifecycle, comments)
"""
