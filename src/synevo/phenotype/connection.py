"""
Connection Module

This module implements the Connection class, the directed edge between two
neurons of a network, and the ConnectionKind enumeration used to describe how
two neurons are related.

Classes:
    ConnectionKind: Relation between two neurons (SELF, INPUTS, PROJECTED, GATED)
    Connection:     A weighted, gain-modulated connection between two neurons
"""

from enum   import Enum
from typing import Optional, TYPE_CHECKING

from synevo.errors import InvalidReferenceError

if TYPE_CHECKING:
    from synevo.phenotype.network import Network

class ConnectionKind(Enum):
    """
    How a connection relates to the neuron holding it.
    """
    SELF      = "self"
    INPUTS    = "inputs"
    PROJECTED = "projected"
    GATED     = "gated"

class Connection:
    """
    A directed, weighted connection between two neurons of the same network.

    The signal carried by the connection is: activation(source) * weight * gain.
    The gain is 1 unless the connection is gated, in which case the gating neuron
    overwrites it with its own activation every time it fires.

    Endpoints and gater are stored as neuron IDs and resolved through the owning
    network; a connection never keeps a neuron alive.

    Public Attributes:
        id:       Unique (within the owning network) connection ID
        from_id:  ID of the source neuron
        to_id:    ID of the destination neuron
        weight:   Weight of the connection
        gain:     Multiplier set by the gating neuron (1 if not gated)
        gater_id: ID of the gating neuron (None if not gated)
    """

    def __init__(self,
                 network: 'Network',
                 from_id: int,
                 to_id  : int,
                 weight : Optional[float] = None):
        """
        Parameters:
            network: the network owning both endpoints
            from_id: ID of the source neuron
            to_id:   ID of the destination neuron
            weight:  weight of the connection; drawn from uniform(-0.1, 0.1) if not given

        Raises:
            InvalidReferenceError: if either endpoint does not exist in 'network'
        """
        for neuron_id in (from_id, to_id):
            if not network.has_neuron(neuron_id):
                raise InvalidReferenceError(f"Connection references non-existent neuron: {neuron_id}")

        self.id      : int           = network.ids.connection_id()
        self.from_id : int           = from_id
        self.to_id   : int           = to_id
        self.weight  : float         = network.rng.random() * .2 - .1 if weight is None else weight
        self.gain    : float         = 1.0
        self.gater_id: Optional[int] = None

    @property
    def gated(self) -> bool:
        """Whether a neuron gates this connection."""
        return self.gater_id is not None

    def __repr__(self):
        return (f"Connection(id={self.id}, from_id={self.from_id}, to_id={self.to_id}, "
                f"weight={self.weight:+.6f}, gain={self.gain:+.6f}, gater_id={self.gater_id})")

    def __str__(self):
        gater = "" if self.gater_id is None else f",g{self.gater_id:02d}"
        return f"[{self.id:03d},{self.from_id:02d}=>{self.to_id:02d},{self.weight:+.02f}{gater}]"
