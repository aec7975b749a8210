"""Troupe: run one or more character-defined agents in a single process.

Usage:
    troupe --characters alice.json,bob.json
"""

__version__ = "0.1.0"
