"""Infrastructure Layer — database, media host and logging adapters.

Invariants:
    - Infrastructure imports core/ only for error types and protocols
    - External failures are mapped to core/errors.py types before leaving this layer
"""
