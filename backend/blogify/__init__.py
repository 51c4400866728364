"""Blogify Application Package — identity, authorization and post lifecycle service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
