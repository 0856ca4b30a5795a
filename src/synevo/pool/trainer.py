"""
Trainer Module

This module implements the Trainer class, the genetic algorithm that evolves a
fixed-size population of networks, one generation at a time.

Classes:
    TrainerState: The states of the trainer's life cycle
    Trainer:      Generational genetic algorithm over a population of Units
"""

import random
import warnings
from enum   import Enum
from typing import Optional, Sequence, TYPE_CHECKING

from synevo.errors              import ConfigurationError
from synevo.phenotype.architect import perceptron
from synevo.phenotype.unit      import Unit

if TYPE_CHECKING:
    from synevo.genotype    import Genome
    from synevo.phenotype   import Network
    from synevo.run.config  import Config

class TrainerState(Enum):
    """
    UNINITIALIZED    -> no population yet ('create_population' has never been called)
    POPULATION_READY -> the population can be activated and evolved
    EVOLVING         -> 'evolve_population' is running
    """
    UNINITIALIZED    = "uninitialized"
    POPULATION_READY = "population_ready"
    EVOLVING         = "evolving"

class Trainer:
    """
    A genetic algorithm evolving a population of networks that drive agents.

    Every tick, the environment asks the trainer for the decision of each live
    agent ('activate_brain'). Once all the agents of a generation are done, the
    environment writes the fitness and score reached by each unit and asks the
    trainer to breed the next generation ('evolve_population').

    Breeding a generation:

    Step 1: Selection
    - Sort the units by fitness (descending; ties keep their previous order)
    - The top 'top_units' units are the winners

    Step 2: Restart
    - As long as no generation has been bred yet, a generation whose best
      fitness is negative is thrown away and replaced by a brand new population

    Step 3: Reproduction
    - The winners are kept as they are (elitism)
    - The next slot gets a crossover of the two best winners
    - All but the last two of the remaining slots get a crossover of two random winners
    - The last two slots get a copy of a random winner
    - Every offspring is mutated before replacing the unit in its slot, whose index it inherits

    Step 4: Bookkeeping
    - Record the best fitness ever seen
    - Sort the units back by index

    Public Attributes:
        population:      List of Units, ordered by index between generations
        max_units:       Population size
        top_units:       Number of winners per generation
        scale_factor:    Factor used to scale the normalized inputs
        iteration:       Current generation number (starts at 1)
        mutation_rate:   Probability of mutating each gene of an offspring
        best_population: Generation in which the best fitness ever was reached
        best_fitness:    Best fitness ever reached
        best_score:      Score of the unit that reached the best fitness ever
        state:           Current TrainerState

    Public Methods:
        reset():                     Reset generation counter, mutation rate and records
        create_population():         Replace the population by brand new units
        activate_brain(agent, target): Decide whether an agent acts this tick
        evolve_population():         Breed the next generation
        selection():                 Rank the units and mark the winners
        crossover(genome_a, genome_b): Recombine two genomes
        mutation(genome):            Mutate a genome
    """

    def __init__(self, config: 'Config', rng: Optional[random.Random] = None):
        """
        Parameters:
            config: Stores configuration parameters
            rng:    source of randomness; the module-level generator if not given

        Raises:
            ConfigurationError: if 'max_units' < 1, or 'top_units' < 2 (after clamping to 'max_units')
        """
        self._config = config
        self._rng    = rng if rng is not None else random

        self.max_units   : int   = config.max_units
        self.top_units   : int   = min(config.top_units, config.max_units)
        self.scale_factor: float = config.scale_factor

        if self.max_units < 1:
            raise ConfigurationError(f"The population needs at least one unit, got max_units={self.max_units}")
        if self.top_units < 2:
            raise ConfigurationError(f"Crossover needs at least two winners, got top_units={self.top_units}")

        self.population: list[Unit]   = []
        self.state     : TrainerState = TrainerState.UNINITIALIZED
        self.reset()

    def reset(self) -> None:
        """
        Reset the generation counter, the mutation rate and the best-ever records.
        """
        self.iteration      : int   = 1
        self.mutation_rate  : float = self._config.initial_mutation_rate
        self.best_population: int   = 0
        self.best_fitness   : float = 0.0
        self.best_score     : float = 0.0

    def _new_network(self) -> 'Network':
        return perceptron(self._config.num_inputs,
                          self._config.num_hidden,
                          self._config.num_outputs,
                          self._config.squash,
                          self._rng)

    def _require_population(self, operation: str) -> None:
        if self.state == TrainerState.UNINITIALIZED:
            raise RuntimeError(f"Cannot {operation} before 'create_population' has been called")
        if self.state == TrainerState.EVOLVING:
            raise RuntimeError(f"Cannot {operation} while the population is evolving")

    def create_population(self) -> None:
        """
        Discard the current population (if any) and create 'max_units' new units,
        each powered by a freshly initialized network.
        """
        self.population = [Unit(self._new_network(), index) for index in range(self.max_units)]
        self.state      = TrainerState.POPULATION_READY

    @staticmethod
    def normalize(value: float, max_value: float) -> float:
        """
        Clamp 'value' to [-max_value, max_value] and divide it by 'max_value'.
        """
        value = max(-max_value, min(max_value, value))
        return value / max_value

    def activate_brain(self, agent, target) -> bool:
        """
        Run the network of the unit driving 'agent' and decide whether it acts.

        The two inputs are the horizontal position of the target and the height
        difference between agent and target, each clamped, normalized and scaled.
        If the first output exceeds the action threshold, 'agent.flap()' is called.

        Parameters:
            agent:  the agent, with attributes 'index' and 'y' and a method 'flap()'
            target: the target, with attributes 'x' and 'y'

        Returns:
            whether the agent acted
        """
        self._require_population("activate a brain")

        target_delta_x = self.normalize(target.x, self._config.max_dx) * self.scale_factor
        target_delta_y = self.normalize(agent.y - target.y, self._config.max_dy) * self.scale_factor

        outputs = self.population[agent.index].network.activate([target_delta_x, target_delta_y])

        act = outputs[0] > self._config.action_threshold
        if act:
            agent.flap()
        return act

    def evolve_population(self) -> None:
        """
        Breed the next generation from the fitness the environment assigned to
        each unit. See the class documentation for the steps involved.
        """
        self._require_population("evolve the population")
        self.state = TrainerState.EVOLVING

        try:
            winners = self.selection()

            if self.mutation_rate == self._config.initial_mutation_rate and winners[0].fitness < 0:
                # nobody met the minimum bar: throw this population away and start over
                warnings.warn(f"Generation {self.iteration}: best fitness {winners[0].fitness} is negative, "
                              f"restarting with a new population")
                self.create_population()
            else:
                self.mutation_rate = self._config.mutation_rate

                for i in range(self.top_units, self.max_units):
                    if i == self.top_units:
                        # crossover of the two best winners
                        offspring = self.crossover(winners[0].genome, winners[1].genome)
                    elif i < self.max_units - 2:
                        # crossover of two random winners
                        offspring = self.crossover(self.get_random_unit(winners).genome,
                                                   self.get_random_unit(winners).genome)
                    else:
                        # copy of a random winner
                        offspring = self.get_random_unit(winners).genome

                    offspring = self.mutation(offspring)
                    self.population[i] = Unit.from_genome(offspring, self.population[i].index, self._rng)

            if winners[0].fitness > self.best_fitness:
                self.best_population = self.iteration
                self.best_fitness    = winners[0].fitness
                self.best_score      = winners[0].score

            self.iteration += 1

        finally:
            # a failed call still leaves the population usable, in index order
            self.population.sort(key=lambda unit: unit.index)
            self.state = TrainerState.POPULATION_READY

    def selection(self) -> list[Unit]:
        """
        Sort the population by fitness (descending, stable) and mark the top
        'top_units' units as winners (and every other unit as a non-winner).

        Returns:
            the winners, best first
        """
        self.population.sort(key=lambda unit: unit.fitness, reverse=True)

        for rank, unit in enumerate(self.population):
            unit.is_winner = rank < self.top_units

        return self.population[:self.top_units]

    def crossover(self, genome_a: 'Genome', genome_b: 'Genome') -> 'Genome':
        """
        Single point crossover of the bias genes of two genomes.
        Both genomes are modified; one of them is returned.
        """
        return genome_a.crossover(genome_b, self._rng)

    def mutation(self, genome: 'Genome') -> 'Genome':
        """
        Mutate every bias and weight gene of 'genome' with probability 'mutation_rate'.
        """
        genome.mutate(self.mutation_rate, self._rng)
        return genome

    def get_random_unit(self, units: Sequence[Unit]) -> Unit:
        return units[self._rng.randint(0, len(units) - 1)]

    def __str__(self):
        return '\n'.join(str(unit) for unit in self.population)
