"""
Flappy Bird Trial for synevo

This module evolves the networks driving a flock of birds through a course of
barriers, each with a gap the birds must fly through.

The Environment:
    Birds fall under gravity and can flap to gain height. Barriers scroll towards
    the birds at constant speed; a bird dies when it leaves the screen or hits a
    barrier outside its gap.

    Every tick, the network of each bird receives:
        - the horizontal position of the next gap, relative to the bird
        - the height difference between the bird and the next gap
    and the bird flaps if the network output exceeds the action threshold.

Fitness Function:
    Fitness = distance travelled - distance still separating the bird from the next gap

    A bird dying before reaching the first barrier gets a negative fitness; if no
    bird of the very first generation does better than that, the population is
    thrown away and a new one is created.

Score:
    The number of barriers passed.

Usage:
    config = Config("config_flappy.ini")
    trial  = Trial_Flappy(config)
    trial.run(num_jobs=1)
"""

import random
from pathlib import Path

from synevo.run.config import Config
from synevo.phenotype  import Unit
from synevo.run        import Trial

HEIGHT        = 800     # height of the screen
SPEED         = 3       # distance the barriers move every tick
SPACING       = 300     # distance between two consecutive barriers
BARRIER_WIDTH = 50
GAP           = 130     # height of the gap in each barrier
GRAVITY       = 0.5
FLAP_VELOCITY = -8
MAX_TICKS     = 3000

class Bird:

    def __init__(self, index: int):
        self.index    = index
        self.y        = HEIGHT / 2
        self.velocity = 0.0

    def flap(self):
        self.velocity = FLAP_VELOCITY

    def update(self):
        self.velocity += GRAVITY
        self.y        += self.velocity

class Target:
    """The gap of the next barrier, as seen from the bird."""

    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y

class Trial_Flappy(Trial):
    """
    Trial evolving birds that fly through a course of barriers.

    All birds of a generation fly the same course, so that their fitness can be
    compared; a new course is drawn for every generation.
    """

    def _reset(self):
        super()._reset()

    def _course(self, length: int) -> list[float]:
        """Height of the gap center of each barrier, for the current generation."""
        rng = random.Random(self._generation_counter)
        return [rng.uniform(GAP, HEIGHT - GAP) for _ in range(length)]

    def _evaluate_unit(self, unit: Unit) -> tuple[float, float]:
        """
        Fly one bird through the course until it dies (or time runs out).
        """
        gaps     = self._course(MAX_TICKS * SPEED // SPACING + 2)
        bird     = Bird(unit.index)
        distance = 0.0
        passed   = 0

        for _ in range(MAX_TICKS):
            # horizontal distance from the bird to the near edge of the next barrier
            barrier_dx = SPACING * (passed + 1) - distance
            target     = Target(barrier_dx + BARRIER_WIDTH, gaps[passed])

            self._trainer.activate_brain(bird, target)
            bird.update()
            distance += SPEED

            inside_barrier = -BARRIER_WIDTH <= barrier_dx - SPEED <= 0
            outside_gap    = abs(bird.y - target.y) > GAP / 2
            if bird.y < 0 or bird.y > HEIGHT or (inside_barrier and outside_gap):
                break

            if barrier_dx - SPEED + BARRIER_WIDTH < 0:
                passed += 1

        fitness = distance - max(0.0, target.x)
        return fitness, float(passed)

    def _report_progress(self):
        self._generation_report()

    def _final_report(self):
        best = self._best_unit()
        print(f"Best unit: {best}")
        print(f"Best fitness ever: {self._trainer.best_fitness:.2f} "
              f"(score {self._trainer.best_score:.0f}, generation {self._trainer.best_population})")

        try:
            best.network.visualize()
            print("Network visualization saved as 'Digraph.gv.pdf'")
        except Exception as e:
            print(f"Could not visualize network: {e}")

if __name__ == "__main__":
    config = Config(str(Path(__file__).parent / "config_flappy.ini"))
    trial  = Trial_Flappy(config)
    trial.run(num_jobs=1)
