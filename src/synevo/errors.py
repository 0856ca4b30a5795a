"""
Exceptions raised by the synevo package.

All of them derive from ValueError: each one signals that the caller handed
the engine or the trainer something it cannot work with.

Classes:
    InvalidReferenceError: A connection or genome record points at a missing neuron
    ShapeMismatchError:    A vector or genome does not have the expected shape
    ConfigurationError:    Trainer parameters that cannot drive a generation
    GatingConflictError:   A connection is gated again, by a different neuron
"""

class InvalidReferenceError(ValueError):
    """A connection endpoint (or genome record) refers to a neuron that does not exist."""

class ShapeMismatchError(ValueError):
    """An input/target vector or a genome has the wrong number of elements."""

class ConfigurationError(ValueError):
    """The trainer cannot be built from the given parameters."""

class GatingConflictError(ValueError):
    """A connection already gated by one neuron is handed to another gater."""
