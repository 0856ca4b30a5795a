"""
Architect Module

Builders for networks of a standard topology.

Functions:
    perceptron: Build a fully connected input -> hidden -> output network
"""

import random
from typing import Optional

from synevo.activations       import SquashKind
from synevo.genotype          import LayerType
from synevo.phenotype.network import Network

def perceptron(num_inputs : int,
               num_hidden : int,
               num_outputs: int,
               squash     : SquashKind              = SquashKind.LOGISTIC,
               rng        : Optional[random.Random] = None) -> Network:
    """
    Build a three-layer perceptron.

    Input neurons pass their input through unchanged; hidden and output neurons
    use 'squash'. Every input neuron projects to every hidden neuron, and every
    hidden neuron projects to every output neuron. No connection is gated and no
    neuron is self-connected.

    The construction order (and therefore the genome layout) only depends on the
    layer sizes, so any two perceptrons of the same sizes have aligned genomes.

    Parameters:
        num_inputs:  number of input neurons
        num_hidden:  number of hidden neurons
        num_outputs: number of output neurons
        squash:      squashing function of hidden and output neurons
        rng:         source of randomness for weights and biases

    Returns:
        the new network

    Raises:
        ValueError: if any layer size is smaller than 1
    """
    for name, size in (("inputs", num_inputs), ("hidden", num_hidden), ("outputs", num_outputs)):
        if size < 1:
            raise ValueError(f"A perceptron needs at least one neuron in each layer, got {size} {name}")

    network = Network(rng)

    input_layer  = [network.add_neuron(LayerType.INPUT, SquashKind.IDENTITY) for _ in range(num_inputs)]
    hidden_layer = [network.add_neuron(LayerType.HIDDEN, squash) for _ in range(num_hidden)]
    output_layer = [network.add_neuron(LayerType.OUTPUT, squash) for _ in range(num_outputs)]

    for source in input_layer:
        for target in hidden_layer:
            source.project(target)

    for source in hidden_layer:
        for target in output_layer:
            source.project(target)

    return network
