"""
Unit Module

This module implements the Unit class, a member of the trainer's population.

Classes:
    Unit: A network together with the bookkeeping the genetic algorithm needs
"""

import random
from typing import Optional

from synevo.genotype          import Genome
from synevo.phenotype.network import Network

class Unit:
    """
    A member of the population.

    You can regard a unit as a thin wrapper around the network that powers an
    agent, to which it adds the agent's index and the results of its last
    episode. The index is the handle the environment uses to tell which agent a
    unit drives; it survives the replacement of the unit's network from one
    generation to the next.

    'fitness' and 'score' are written by the environment; 'is_winner' and the
    network are written by the trainer while evolving the population.

    Public Attributes:
        network:   The network powering the agent
        index:     Stable handle of the agent driven by this unit
        fitness:   Fitness reached during the last episode (drives selection)
        score:     Score reached during the last episode (reported only)
        is_winner: Whether the unit was selected as a winner in the last generation

    Public Properties:
        genome: The genome of the unit's network

    Class Methods:
        from_genome(genome, index, rng): Build a fresh unit from a genome
    """

    def __init__(self, network: Network, index: int):
        self.network  : Network = network
        self.index    : int     = index
        self.fitness  : float   = 0.0
        self.score    : float   = 0.0
        self.is_winner: bool    = False

    @classmethod
    def from_genome(cls, genome: Genome, index: int, rng: Optional[random.Random] = None) -> 'Unit':
        return cls(Network.from_genome(genome, rng), index)

    @property
    def genome(self) -> Genome:
        """A fresh Genome describing the unit's network."""
        return self.network.to_genome()

    def __str__(self):
        winner = " [WINNER]" if self.is_winner else ""
        return f"index={self.index:03d}, fitness={self.fitness:.4f}, score={self.score:.4f}{winner}"

    def __repr__(self):
        return f"Unit(index={self.index}, fitness={self.fitness}, score={self.score}, is_winner={self.is_winner})"
