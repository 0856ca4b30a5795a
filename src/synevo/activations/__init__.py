"""
Activations Package

This package provides the squashing functions available to synevo neurons,
each paired with the derivative used when back-propagating errors.

Exported:
    SquashKind:   Enumeration of the squashing functions
    squash:       Apply a squashing function (or its derivative) to a neuron state
    parse_squash: Convert a name into a SquashKind
    squashes:     Dictionary mapping each SquashKind to its (function, derivative) pair
    squash_codes: Dictionary mapping each SquashKind to a 3-letter identifier
"""

from synevo.activations.squash import (
    SquashKind,
    squash,
    parse_squash,
    squashes,
    squash_codes,
    logistic_squash,
    tanh_squash,
    identity_squash,
    hlim_squash,
    relu_squash
)

__all__ = [
    'SquashKind',
    'squash',
    'parse_squash',
    'squashes',
    'squash_codes',
    'logistic_squash',
    'tanh_squash',
    'identity_squash',
    'hlim_squash',
    'relu_squash'
]
