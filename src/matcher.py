#!/usr/bin/env python3
"""
Response prefix matching for the catlink driver.

Known response prefixes are held in a table keyed by their normalized form
(whitespace trimmed, upper-cased). Lookups probe the longest candidate first
so that e.g. "MD0" wins over "MD" for a line starting with "MD0".
"""

from typing import Dict, Iterable, NamedTuple, Optional, Tuple

from .errors import EmptyStatePrefix
from .models import StateDefinition

MIN_PREFIX_LEN = 2


class StateMatch(NamedTuple):
    definition: StateDefinition
    prefix_length: int


def normalize_prefix(prefix: str) -> str:
    return prefix.strip().upper()


def build_table(states: Iterable[StateDefinition], log=None) -> Tuple[Dict[str, StateDefinition], int]:
    """Build the prefix lookup table.

    Args:
        states: Configured state definitions
        log: Optional logger used to report overwritten prefixes

    Returns:
        Tuple of (prefix table, longest normalized prefix length)

    Raises:
        EmptyStatePrefix: if any prefix is blank after normalization
    """
    table: Dict[str, StateDefinition] = {}
    max_len = 0
    for position, state in enumerate(states):
        key = normalize_prefix(state.prefix)
        if not key:
            raise EmptyStatePrefix(
                "catlink.build_table", f"State definition #{position} has an empty prefix"
            )
        if key in table and log is not None:
            log.warning("Duplicate state prefix, keeping the last definition", prefix=key)
        table[key] = state
        max_len = max(max_len, len(key))
    return table, max_len


class StateMatcher:
    """Immutable longest-prefix lookup over configured state definitions."""

    def __init__(self, states: Iterable[StateDefinition], log=None):
        self._table, self.max_prefix_len = build_table(states, log)

    def __len__(self):
        return len(self._table)

    def lookup(self, raw_line: str) -> Optional[StateMatch]:
        """Find the state definition for raw_line.

        Returns:
            StateMatch for the longest registered prefix, or None when the
            line is too short or unknown.
        """
        if len(raw_line) < MIN_PREFIX_LEN:
            return None

        probe_len = max(min(self.max_prefix_len, len(raw_line)), MIN_PREFIX_LEN)
        probe = raw_line[:probe_len].upper()

        for length in range(probe_len, MIN_PREFIX_LEN - 1, -1):
            state = self._table.get(probe[:length].strip())
            if state is not None:
                return StateMatch(state, length)
        return None
