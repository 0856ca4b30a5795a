"""
synevo - evolving gated recurrent networks with a genetic algorithm.

This package evolves a population of small networks, built from neurons whose
connections can be gated by other neurons, to drive the binary decision of an
agent (act / do not act). Networks are trained by a generational genetic
algorithm; supervised back-propagation is also available.

Main components:
- activations: Squashing functions and their derivatives
- genotype:    Genetic encoding (genomes and genes)
- phenotype:   Neurons, connections, networks and units
- pool:        The genetic algorithm (Trainer)
- run:         Configuration and trial framework

Example:
    >>> from synevo import Config, Trainer
    >>> trainer = Trainer(Config())
    >>> trainer.create_population()
    >>> # ... run the agents, calling trainer.activate_brain(agent, target) every tick ...
    >>> # ... assign unit.fitness and unit.score to every unit ...
    >>> trainer.evolve_population()
"""

__version__ = "0.1.0"

from synevo.errors     import ConfigurationError, GatingConflictError, InvalidReferenceError, ShapeMismatchError
from synevo.run.config import Config
from synevo.run.trial  import Trial
from synevo.genotype   import ConnectionGene, Genome, NeuronGene
from synevo.phenotype  import Connection, Network, Neuron, Unit, perceptron
from synevo.pool       import Trainer

__all__ = [
    "Config",
    "Trial",
    "Genome",
    "NeuronGene",
    "ConnectionGene",
    "Connection",
    "Neuron",
    "Network",
    "Unit",
    "perceptron",
    "Trainer",
    "ConfigurationError",
    "GatingConflictError",
    "InvalidReferenceError",
    "ShapeMismatchError",
]
