"""
Identifier Allocator Module

This module implements the IdAllocator class, which hands out neuron and
connection IDs for a single network.

Classes:
    IdAllocator: Per-network source of monotonically increasing IDs
"""

from itertools import count

class IdAllocator:
    """
    Allocates unique, monotonically increasing IDs for the neurons and the
    connections of one network.

    Every Network owns its own allocator, so independent networks never share
    (or compete for) identifiers and no global counter has to be reset between
    runs or tests.
    """

    def __init__(self):
        self._next_neuron_id     = count(0)
        self._next_connection_id = count(0)
        self._neurons            = 0
        self._connections        = 0

    def neuron_id(self) -> int:
        """Return a fresh neuron ID."""
        self._neurons += 1
        return next(self._next_neuron_id)

    def connection_id(self) -> int:
        """Return a fresh connection ID."""
        self._connections += 1
        return next(self._next_connection_id)

    def quantity(self) -> dict[str, int]:
        """
        Number of IDs handed out so far.

        Returns:
            {"neurons": <count>, "connections": <count>}
        """
        return {"neurons": self._neurons, "connections": self._connections}
