"""Infrastructure Layer — database engine, SQL store, logging setup.

Invariants:
    - Everything here does IO; nothing in core/ imports from this package
"""
