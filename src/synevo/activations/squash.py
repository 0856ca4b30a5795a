"""
Squash Module

This module implements the squashing functions a neuron applies to its state,
each paired with the derivative used when back-propagating errors.

Classes:
    SquashKind: Enumeration of the available squashing functions

Functions:
    logistic_squash, tanh_squash, identity_squash, hlim_squash, relu_squash:
                  The squashing functions (each with a '_derivative' counterpart)
    squash:       Apply a squashing function (or its derivative) to a neuron state
    parse_squash: Convert a squashing function name into a SquashKind
"""

import autograd.numpy as np  # type: ignore
from enum import Enum

class SquashKind(Enum):
    """
    The closed set of squashing functions a neuron can use.
    The value is the name used in genome records and configuration files.
    """
    LOGISTIC = "LOGISTIC"
    TANH     = "TANH"
    IDENTITY = "IDENTITY"
    HLIM     = "HLIM"
    RELU     = "RELU"

def logistic_squash(x):
    x = np.clip(x, -500, 500)   # to prevent overflow when calculating exp
    return 1.0 / (1.0 + np.exp(-x))

def logistic_derivative(x):
    fx = logistic_squash(x)
    return fx * (1.0 - fx)

def tanh_squash(x):
    return np.tanh(x)

def tanh_derivative(x):
    return 1.0 - np.tanh(x) ** 2

def identity_squash(x):
    return x

def identity_derivative(x):
    return 1.0

def hlim_squash(x):
    return 1.0 if x > 0 else 0.0

def hlim_derivative(x):
    # pseudo-derivative: a hard limiter passes the error through unchanged
    return 1.0

def relu_squash(x):
    return x if x > 0 else 0.0

def relu_derivative(x):
    return 1.0 if x > 0 else 0.0

# kind => (function, derivative)
squashes = {
    SquashKind.LOGISTIC: (logistic_squash, logistic_derivative),
    SquashKind.TANH    : (tanh_squash,     tanh_derivative),
    SquashKind.IDENTITY: (identity_squash, identity_derivative),
    SquashKind.HLIM    : (hlim_squash,     hlim_derivative),
    SquashKind.RELU    : (relu_squash,     relu_derivative),
    }

# 3-letter identifiers for each squashing function
squash_codes = {
    SquashKind.LOGISTIC: "LOG",
    SquashKind.TANH    : "TNH",
    SquashKind.IDENTITY: "IDN",
    SquashKind.HLIM    : "HLM",
    SquashKind.RELU    : "RLU",
    }

def squash(kind: SquashKind, x: float, derivate: bool = False) -> float:
    """
    Apply the squashing function 'kind' (or its derivative) to 'x'.

    Parameters:
        kind:     which squashing function to use
        x:        the neuron state
        derivate: if True, return the derivative evaluated at 'x'

    Returns:
        f(x), or f'(x) when 'derivate' is True
    """
    function, derivative = squashes[kind]
    return derivative(x) if derivate else function(x)

def parse_squash(name: str | SquashKind) -> SquashKind:
    """
    Convert a squashing function name (case insensitive) into a SquashKind.

    Raises:
        ValueError: if the name does not match any known squashing function
    """
    if isinstance(name, SquashKind):
        return name
    try:
        return SquashKind(name.strip().upper())
    except ValueError:
        valid = ", ".join(kind.value for kind in SquashKind)
        raise ValueError(f"Invalid squash function '{name}' (expected one of: {valid})") from None
