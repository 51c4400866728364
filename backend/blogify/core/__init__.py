"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Authorization, validation, hashing and token rules all live here

Design Decisions:
    - Functional core separated from imperative shell: services/ do the IO
      around these functions
"""
