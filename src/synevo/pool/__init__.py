"""
Pool Package

This package implements the population-level machinery of the genetic algorithm.

Modules:
    trainer: Trainer class and TrainerState enumeration

Exported Classes:
    Trainer:      Generational genetic algorithm over a population of Units
    TrainerState: The states of the trainer's life cycle
"""

from synevo.pool.trainer import Trainer, TrainerState

__all__ = ['Trainer',
           'TrainerState']
