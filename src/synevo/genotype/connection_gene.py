"""
Connection Gene Module

This module implements the ConnectionGene class.

Classes:
    ConnectionGene: Gene encoding a weighted connection between two neurons
"""

import random
from typing import Optional

from synevo.genotype.mutation import mutate_gene

class ConnectionGene:
    """
    A gene describing a weighted connection between two neurons of a genome.

    Endpoints are positions in the genome's neuron list, not neuron IDs: this
    keeps the genomes of networks built from the same layer sizes aligned
    position by position, which is what crossover relies on.

    Public Attributes:
        from_index:  Position of the source neuron
        to_index:    Position of the destination neuron
        weight:      Weight of the connection
        gater_index: Position of the neuron gating this connection (None if not gated)

    Public Methods:
        mutate(rate, rng): Stochastically rescale the weight
    """

    def __init__(self,
                 from_index : int,
                 to_index   : int,
                 weight     : float,
                 gater_index: Optional[int] = None):
        self.from_index : int           = from_index
        self.to_index   : int           = to_index
        self.weight     : float         = weight
        self.gater_index: Optional[int] = gater_index

    def mutate(self, rate: float, rng: random.Random) -> None:
        """
        With probability 'rate', rescale the weight by a random factor of mean 1.
        """
        self.weight = mutate_gene(self.weight, rate, rng)

    def to_dict(self) -> dict:
        return {"from": self.from_index, "to": self.to_index, "weight": self.weight, "gater": self.gater_index}

    @classmethod
    def from_dict(cls, data: dict) -> 'ConnectionGene':
        return cls(data["from"], data["to"], data["weight"], data.get("gater"))

    def __eq__(self, other):
        if not isinstance(other, ConnectionGene):
            return NotImplemented
        return ((self.from_index, self.to_index, self.weight, self.gater_index) ==
                (other.from_index, other.to_index, other.weight, other.gater_index))

    def __repr__(self):
        return (f"ConnectionGene(from_index={self.from_index}, to_index={self.to_index}, "
                f"weight={self.weight:+.6f}, gater_index={self.gater_index})")

    def __str__(self):
        gater = "" if self.gater_index is None else f",g{self.gater_index:02d}"
        return f"[{self.from_index:02d}=>{self.to_index:02d},{self.weight:+.02f}{gater}]"
