"""
Phenotype Package

This package implements the executable side of a genome: neurons wired by
gain-modulated connections into networks that can be activated (forward pass),
trained (backward pass), and converted to and from a Genome.

Modules:
    connection: Connection class and ConnectionKind enumeration
    neuron:     Neuron class (activation, back-propagation, gating, traces)
    network:    Network class (layers, forward/backward pass, genome conversion)
    architect:  Builders for standard topologies
    unit:       Unit class, a member of the trainer's population

Exported Classes:
    Connection:     A weighted, gain-modulated connection between two neurons
    ConnectionKind: How two neurons are related (SELF, INPUTS, PROJECTED, GATED)
    Connected:      A relation between two neurons and the connection realizing it
    Neuron:         A computational node applying a squashing function
    Network:        An ordered collection of neurons organized in layers
    Unit:           A network plus the bookkeeping of the genetic algorithm

Exported Functions:
    perceptron: Build a fully connected three-layer network
"""

from synevo.phenotype.connection import Connection, ConnectionKind
from synevo.phenotype.neuron     import Connected, Neuron
from synevo.phenotype.network    import Network
from synevo.phenotype.architect  import perceptron
from synevo.phenotype.unit       import Unit

__all__ = ['Connection',
           'ConnectionKind',
           'Connected',
           'Neuron',
           'Network',
           'Unit',
           'perceptron']
