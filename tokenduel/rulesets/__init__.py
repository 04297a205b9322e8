"""
Rulesets - Ready-made action tables.

Each ruleset provides a create_*_table() function returning an
ActionTable with its actions and both actors.
"""

from .skirmish import create_skirmish_table

RULESETS = {
    "skirmish": create_skirmish_table,
}

__all__ = [
    "create_skirmish_table",
    "RULESETS",
]
