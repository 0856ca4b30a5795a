"""
Trial Module

This module defines the abstract base class for trials with built-in support
for CPU-based parallelization using joblib.

A trial represents one independent run of the genetic algorithm: a population
is created, every unit is evaluated by the environment, and generations are bred
until the maximum number of generations is reached or the fitness target is met.
"""

import numpy as np
import random
from abc    import ABC, abstractmethod
from joblib import Parallel, delayed
from typing import Optional

from synevo.phenotype.unit import Unit
from synevo.pool.trainer   import Trainer
from synevo.run.config     import Config

class Trial(ABC):
    """
    Abstract base class for implementing a trial.

    The trial plays the part of the environment: it runs the agent driven by
    each unit, and writes back the fitness and score the agent reached before
    asking the trainer to breed the next generation.

    Subclasses must implement:
    - _reset(): Reset trial-specific state and call super()._reset()
    - _evaluate_unit(unit): Run one episode for a unit, return its (fitness, score)
    - _report_progress(): Display progress after each generation
    - _final_report(): Display final results

    Subclasses can override:
    - _evaluate_units(num_jobs): Evaluate the whole population at once (e.g. all agents in one simulation)
    - _terminate(): Custom termination logic (default: max generations + fitness threshold)

    Public Methods:
        run(): Execute a complete trial

    Parallelization of the evaluation of units:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self, config: Config, suppress_output: bool = False, rng: Optional[random.Random] = None):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress and final reports
            rng:             Source of randomness handed to the trainer
        """
        self._config            : Config            = config
        self._generation_counter: int               = 0
        self._trainer           : Optional[Trainer] = None
        self._suppress_output   : bool              = suppress_output
        self._rng                                   = rng
        self.failed             : bool              = True

    @property
    def trainer(self) -> Optional[Trainer]:
        return self._trainer

    def run(self, num_jobs: int = 1):
        """
        Run the trial.

        Resets the trial state and runs the genetic algorithm
        until the terminate condition is met.

        Parameters:
            num_jobs: Number of parallel processes for the evaluation of units
                      1 = serial (no parallelization)
                     -1 = use all available CPU cores
                     >1 = use specified number of processes
        """
        self._reset()

        # Create the initial population
        self._trainer = Trainer(self._config, self._rng)
        self._trainer.create_population()

        # Evaluate the initial population
        self._evaluate_units(num_jobs)

        if not self._suppress_output:
            self._report_progress()

        # Evolution loop
        while not self._terminate():
            self._generation_counter += 1

            self._trainer.evolve_population()
            self._evaluate_units(num_jobs)

            if not self._suppress_output:
                self._report_progress()

        if not self._suppress_output:
            self._final_report()

    @abstractmethod
    def _reset(self):
        """
        Reset the trial state before starting a new run.

        Subclasses should call super()._reset() and then
        initialize their problem-specific data.
        """
        self._generation_counter = 0
        self._trainer            = None
        self.failed              = True

    @abstractmethod
    def _evaluate_unit(self, unit: Unit) -> tuple[float, float]:
        """
        Run one episode with the agent driven by 'unit'.

        Parameters:
            unit: The unit to evaluate

        Returns:
            (fitness, score) reached by the agent
        """
        pass

    def _evaluate_units(self, num_jobs: int):
        """
        Evaluate every unit of the population and write back its fitness and score.

        Uses serial or parallel evaluation based on num_jobs:
        - num_jobs=1: Sequential evaluation in single process
        - num_jobs>1 or -1: Parallel evaluation using joblib

        The trainer must not evolve the population before this method returns.

        Parameters:
            num_jobs: Number of parallel processes for the evaluation of units
        """
        units = self._trainer.population

        if num_jobs == 1:
            results = [self._evaluate_unit(unit) for unit in units]
        else:
            results = Parallel(num_jobs)(delayed(self._evaluate_unit)(unit) for unit in units)

        for unit, (fitness, score) in zip(units, results):
            unit.fitness = fitness
            unit.score   = score

    def _best_unit(self) -> Unit:
        return max(self._trainer.population, key=lambda unit: unit.fitness)

    def _generation_report(self):
        """
        Print a report describing the current generation.
        """
        fitness = np.array([unit.fitness for unit in self._trainer.population])
        best    = self._best_unit()

        s  = f"===============\n"
        s += f"GENERATION {self._generation_counter:04d}\n"
        s += f"population size = {len(self._trainer.population)}\n"
        s += f"mutation rate   = {self._trainer.mutation_rate:.2f}\n"
        s += f"maximum fitness = {fitness.max():.4f} (unit {best.index}, score {best.score:.2f})\n"
        s += f"mean fitness    = {fitness.mean():.4f}\n"
        s += f"best ever       = {self._trainer.best_fitness:.4f} in generation {self._trainer.best_population}\n"
        print(s)

    @abstractmethod
    def _report_progress(self):
        """
        Report trial progress after each generation.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials.
        """
        pass

    @abstractmethod
    def _final_report(self):
        """
        Produce final report at the end of the trial.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials.
        """
        pass

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        This default implementation stops the trial after a maximum number
        of generations and (optionally) also stops it if the best fitness
        in the current generation has reached a given threshold.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        terminate = self._generation_counter >= self._config.max_number_generations

        if self._config.fitness_termination_check:
            if self._config.fitness_threshold is None:
                raise RuntimeError("'fitness_threshold' must be set when 'fitness_termination_check' is True")

            success   = self._best_unit().fitness >= self._config.fitness_threshold
            terminate = terminate or success

            if terminate:
                self.failed = not success

        return terminate
