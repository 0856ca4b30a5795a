"""
Genome Module

This module implements the Genome class, the positionally-ordered record of
everything a network inherits: neuron biases and squashing functions, and
connection weights (plus which neuron, if any, gates each connection).

Classes:
    Genome: Ordered neuron and connection genes describing a network
"""

import copy
import random

from synevo.errors                   import InvalidReferenceError, ShapeMismatchError
from synevo.genotype.connection_gene import ConnectionGene
from synevo.genotype.neuron_gene     import LayerType, NeuronGene

class Genome:
    """
    A network described as an ordered list of neuron genes and an ordered list
    of connection genes.

    The order of both lists is the construction order of the network the genome
    was taken from, so two networks built from the same layer sizes produce
    genomes whose genes line up position by position. Crossover and mutation
    work on that alignment and never look at neuron IDs.

    Public Attributes:
        neuron_genes: List of NeuronGene objects, in network construction order
        conn_genes:   List of ConnectionGene objects, in network construction order

    Public Properties:
        biases:  The bias gene of every neuron, in order
        weights: The weight gene of every connection, in order
        shape:   (number of neuron genes, number of connection genes)

    Public Methods:
        crossover(other, rng): Swap bias genes past a random cut point, return one of the two genomes
        mutate(rate, rng):     Stochastically rescale every bias and weight gene
        copy():                Deep copy of this genome
        to_dict():             Convert genome to dictionary representation

    Class Methods:
        from_dict(genome_dict): Create a genome from a dictionary description
    """

    def __init__(self,
                 neuron_genes: list[NeuronGene]     | None = None,
                 conn_genes  : list[ConnectionGene] | None = None):
        self.neuron_genes: list[NeuronGene]     = list(neuron_genes or [])
        self.conn_genes  : list[ConnectionGene] = list(conn_genes or [])

    @classmethod
    def from_dict(cls, genome_dict: dict) -> 'Genome':
        """
        Create a Genome from a dictionary description.

        Dictionary format:
            {
                "neurons": [
                    {"bias": 0.0,  "squash": "IDENTITY", "layer": "INPUT"},
                    {"bias": 0.05, "squash": "LOGISTIC", "layer": "HIDDEN"},
                    {"bias": -0.1, "squash": "LOGISTIC", "layer": "OUTPUT"}
                ],
                "connections": [
                    {"from": 0, "to": 1, "weight":  0.5, "gater": None},
                    {"from": 1, "to": 2, "weight": -0.3, "gater": None}
                ]
            }

        Raises:
            ShapeMismatchError:    if "neurons" or "connections" is not a list
            InvalidReferenceError: if a connection refers to a neuron position that does not exist
        """
        neurons_data     = genome_dict["neurons"]
        connections_data = genome_dict.get("connections", [])
        if not isinstance(neurons_data, list) or not isinstance(connections_data, list):
            raise ShapeMismatchError("Genome 'neurons' and 'connections' must be lists")

        genome = cls([NeuronGene.from_dict(n) for n in neurons_data],
                     [ConnectionGene.from_dict(c) for c in connections_data])
        genome.validate()
        return genome

    def to_dict(self) -> dict:
        """
        Convert the genome to a dictionary representation.
        This is the inverse operation of from_dict().
        """
        return {
            "neurons"    : [gene.to_dict() for gene in self.neuron_genes],
            "connections": [gene.to_dict() for gene in self.conn_genes]
        }

    def validate(self) -> None:
        """
        Check that every connection gene refers to existing neuron positions.

        Raises:
            InvalidReferenceError: if an endpoint or gater position is out of range
        """
        number_neurons = len(self.neuron_genes)
        for position, gene in enumerate(self.conn_genes):
            for role, index in (("source", gene.from_index), ("destination", gene.to_index), ("gater", gene.gater_index)):
                if index is None and role == "gater":
                    continue
                if not 0 <= index < number_neurons:
                    raise InvalidReferenceError(
                        f"Connection gene {position} references non-existent {role} neuron: {index}")

    @property
    def biases(self) -> list[float]:
        return [gene.bias for gene in self.neuron_genes]

    @property
    def weights(self) -> list[float]:
        return [gene.weight for gene in self.conn_genes]

    @property
    def shape(self) -> tuple[int, int]:
        return len(self.neuron_genes), len(self.conn_genes)

    def positions(self, layer: LayerType) -> list[int]:
        """Positions of the neuron genes belonging to 'layer'."""
        return [i for i, gene in enumerate(self.neuron_genes) if gene.layer == layer]

    def copy(self) -> 'Genome':
        return copy.deepcopy(self)

    def crossover(self, other: 'Genome', rng: random.Random) -> 'Genome':
        """
        Single point crossover restricted to the bias genes.

        A cut point is drawn uniformly from [0, number of neurons - 1]; the bias
        genes of every neuron at or past the cut point are swapped between the
        two genomes (both are modified in place). One of the two genomes is then
        returned with equal probability. Connection weights are never exchanged:
        they travel with whichever parent ends up being returned.

        Parameters:
            other: the genome to cross with, must have the same shape as this one
            rng:   source of randomness

        Returns:
            either this genome or 'other', after the swap

        Raises:
            ShapeMismatchError: if the two genomes are not aligned
        """
        if self.shape != other.shape:
            raise ShapeMismatchError(f"Cannot cross genomes of shape {self.shape} and {other.shape}")
        if not self.neuron_genes:
            raise ShapeMismatchError("Cannot cross genomes without neurons")

        cut_point = rng.randint(0, len(self.neuron_genes) - 1)
        for gene_a, gene_b in zip(self.neuron_genes[cut_point:], other.neuron_genes[cut_point:]):
            gene_a.bias, gene_b.bias = gene_b.bias, gene_a.bias

        return self if rng.randint(0, 1) == 1 else other

    def mutate(self, rate: float, rng: random.Random) -> None:
        """
        Give every bias gene, then every weight gene, an independent chance
        'rate' of being rescaled by a random factor of mean 1.
        """
        for gene in self.neuron_genes:
            gene.mutate(rate, rng)
        for gene in self.conn_genes:
            gene.mutate(rate, rng)

    def __eq__(self, other):
        if not isinstance(other, Genome):
            return NotImplemented
        return self.neuron_genes == other.neuron_genes and self.conn_genes == other.conn_genes

    def __str__(self):
        neurons_str     = " ".join(str(gene) for gene in self.neuron_genes)
        connections_str = " ".join(str(gene) for gene in self.conn_genes)
        return f"Neurons:\n{neurons_str}\nConnections:\n{connections_str}"

    def __repr__(self):
        return f"Genome(neuron_genes={self.neuron_genes!r}, conn_genes={self.conn_genes!r})"
