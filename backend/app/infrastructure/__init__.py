"""Infrastructure Layer — database, logging, and workspace client implementations.

Invariants:
    - Implementations satisfy core/repository_protocols.py structurally
    - Infrastructure may import core types; core never imports infrastructure
"""
