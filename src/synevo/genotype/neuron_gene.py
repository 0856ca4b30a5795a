"""
Neuron Gene Module.

This module implements the NeuronGene class and LayerType enumeration.

Classes:
    LayerType:  Enumeration for the layer a neuron belongs to (INPUT, HIDDEN, OUTPUT)
    NeuronGene: Gene encoding a single neuron
"""

import random
from enum import Enum

from synevo.activations         import SquashKind, parse_squash, squash_codes
from synevo.genotype.mutation   import mutate_gene

class LayerType(Enum):
    """
    Neurons come in three types: input, hidden, output.
    """
    INPUT  = "I"
    HIDDEN = "H"
    OUTPUT = "O"

class NeuronGene:
    """
    A gene describing a neuron in a network genome.

    The gene records everything about a neuron that is inherited: its bias,
    its squashing function and the layer it sits in. Transient state (activation,
    traces, errors) is not part of the genome.

    Public Attributes:
        bias:   Bias added to the neuron state
        squash: Squashing function applied to the neuron state
        layer:  Layer the neuron belongs to

    Public Methods:
        mutate(rate, rng): Stochastically rescale the bias
    """

    def __init__(self,
                 bias  : float,
                 squash: SquashKind | str = SquashKind.LOGISTIC,
                 layer : LayerType        = LayerType.HIDDEN):
        """
        Parameters:
            bias:   Bias added to the neuron state
            squash: Squashing function (a SquashKind or its name)
            layer:  Layer the neuron belongs to
        """
        self.bias  : float      = bias
        self.squash: SquashKind = parse_squash(squash)
        self.layer : LayerType  = layer

    def mutate(self, rate: float, rng: random.Random) -> None:
        """
        With probability 'rate', rescale the bias by a random factor of mean 1.
        """
        self.bias = mutate_gene(self.bias, rate, rng)

    def to_dict(self) -> dict:
        return {"bias": self.bias, "squash": self.squash.value, "layer": self.layer.name}

    @classmethod
    def from_dict(cls, data: dict) -> 'NeuronGene':
        return cls(data["bias"], data.get("squash", SquashKind.LOGISTIC), LayerType[data.get("layer", "HIDDEN")])

    def __eq__(self, other):
        if not isinstance(other, NeuronGene):
            return NotImplemented
        return (self.bias, self.squash, self.layer) == (other.bias, other.squash, other.layer)

    def __repr__(self):
        return f"NeuronGene(bias={self.bias}, squash=SquashKind.{self.squash.name}, layer=LayerType.{self.layer.name})"

    def __str__(self):
        return f"[{self.layer.value},{squash_codes[self.squash]},b={self.bias:+.2f}]"
