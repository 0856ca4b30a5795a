"""
Run Package

This package provides what is needed to run the genetic algorithm: the
configuration and the abstract trial driving the environment.

Exported Classes:
    Config: Configuration parameters, parsed from an INI file
    Trial:  Abstract base class for a run of the genetic algorithm
"""

from synevo.run.config import Config
from synevo.run.trial  import Trial

__all__ = ['Config',
           'Trial']
