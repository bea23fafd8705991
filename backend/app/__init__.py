"""Huly Tool Server — tool invocation over a Huly workspace with safe protocol errors.

Invariants:
    - Package root holds only the version string (no import side-effects)
"""

__version__ = "0.3.0"
