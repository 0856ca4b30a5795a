"""
Network Module

This module implements the Network class, the container owning a set of neurons
(and, through them, their connections), together with the conversion between a
network and its Genome.

Classes:
    Network: An ordered collection of neurons organized in input, hidden and output layers
"""

import random
from typing import Optional, TYPE_CHECKING
import graphviz  # type: ignore

from synevo.activations          import SquashKind, squash_codes
from synevo.errors               import InvalidReferenceError, ShapeMismatchError
from synevo.genotype             import ConnectionGene, Genome, IdAllocator, LayerType, NeuronGene
from synevo.phenotype.connection import Connection
from synevo.phenotype.neuron     import Neuron

if TYPE_CHECKING:
    from collections.abc import Sequence

class Network:
    """
    A network of neurons, organized in an input, a hidden and an output layer.

    The network owns its neurons, which in turn own their connections; neurons
    and connections refer to one another by ID, and IDs are handed out by an
    allocator belonging to the network. Independent networks therefore never
    interfere with each other.

    A forward pass feeds the inputs to the input neurons, then activates the
    hidden neurons and finally the output neurons, each layer in construction
    order. A backward pass visits the output neurons and then the hidden neurons,
    each layer in reverse construction order.

    Public Attributes:
        ids: Allocator handing out neuron and connection IDs for this network
        rng: Source of randomness for initial weights and biases

    Public Properties:
        input_neurons:  List of input neurons, in construction order
        hidden_neurons: List of hidden neurons, in construction order
        output_neurons: List of output neurons, in construction order
        inputs_count:   Number of input neurons
        outputs_count:  Number of output neurons

    Public Methods:
        add_neuron(layer, squash, bias): Create a neuron owned by this network
        neuron(neuron_id):               Look a neuron up by ID
        neurons():                       All neurons, in construction order
        connections():                   All connections, in genome order
        activate(inputs):                Forward pass
        propagate(rate, targets):        Backward pass (supervised learning)
        clear():                         Clear all neurons
        reset():                         Reset all neurons
        to_genome():                     Describe the network as a Genome
        visualize(view):                 Draw the network with Graphviz

    Class Methods:
        from_genome(genome, rng): Build a network from a Genome
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Parameters:
            rng: source of randomness; the module-level generator if not given
        """
        self.ids: IdAllocator = IdAllocator()
        self.rng = rng if rng is not None else random
        self._neurons: dict[int, Neuron] = {}   # neuron ID => neuron

    def _register(self, neuron: Neuron) -> None:
        self._neurons[neuron.id] = neuron

    def add_neuron(self,
                   layer : LayerType       = LayerType.HIDDEN,
                   squash: SquashKind      = SquashKind.LOGISTIC,
                   bias  : Optional[float] = None) -> Neuron:
        """
        Create a new neuron in 'layer'.

        Parameters:
            layer:  layer the neuron belongs to
            squash: squashing function of the neuron
            bias:   bias of the neuron (random if not given)

        Returns:
            the new neuron
        """
        return Neuron(self, layer, squash, bias)

    def has_neuron(self, neuron_id: int) -> bool:
        return neuron_id in self._neurons

    def owns(self, neuron: Neuron) -> bool:
        return self._neurons.get(neuron.id) is neuron

    def neuron(self, neuron_id: int) -> Neuron:
        """
        Raises:
            InvalidReferenceError: if no neuron has ID 'neuron_id'
        """
        try:
            return self._neurons[neuron_id]
        except KeyError:
            raise InvalidReferenceError(f"Network has no neuron with ID {neuron_id}") from None

    def neurons(self) -> list[Neuron]:
        return list(self._neurons.values())

    def _layer(self, layer: LayerType) -> list[Neuron]:
        return [neuron for neuron in self._neurons.values() if neuron.layer == layer]

    @property
    def input_neurons(self) -> list[Neuron]:
        return self._layer(LayerType.INPUT)

    @property
    def hidden_neurons(self) -> list[Neuron]:
        return self._layer(LayerType.HIDDEN)

    @property
    def output_neurons(self) -> list[Neuron]:
        return self._layer(LayerType.OUTPUT)

    @property
    def inputs_count(self) -> int:
        return len(self.input_neurons)

    @property
    def outputs_count(self) -> int:
        return len(self.output_neurons)

    def connections(self) -> list[Connection]:
        """
        All connections of the network, in genome order: for each neuron (in
        construction order) the connections it projects, followed by its
        self-connection if that has a non-zero weight.
        """
        result = []
        for neuron in self._neurons.values():
            result.extend(neuron.projected.values())
            if neuron.is_self_connected():
                result.append(neuron.self_connection)
        return result

    def activate(self, inputs: 'Sequence[float]') -> list[float]:
        """
        Perform a forward pass through the network.

        Parameters:
            inputs: one value per input neuron

        Returns:
            the activation of each output neuron

        Raises:
            ShapeMismatchError: if the number of inputs differs from the number of input neurons
        """
        input_neurons = self.input_neurons
        if len(inputs) != len(input_neurons):
            raise ShapeMismatchError(f"Expected {len(input_neurons)} inputs, got {len(inputs)}")

        for neuron, value in zip(input_neurons, inputs):
            neuron.activate(value)

        for neuron in self.hidden_neurons:
            neuron.activate()

        return [neuron.activate() for neuron in self.output_neurons]

    def propagate(self, rate: Optional[float], targets: 'Sequence[float]') -> None:
        """
        Perform a backward pass through the network, adjusting weights and biases.

        Parameters:
            rate:    learning rate (the neuron default if None)
            targets: expected activation of each output neuron

        Raises:
            ShapeMismatchError: if the number of targets differs from the number of output neurons
        """
        output_neurons = self.output_neurons
        if len(targets) != len(output_neurons):
            raise ShapeMismatchError(f"Expected {len(output_neurons)} targets, got {len(targets)}")

        for neuron, target in reversed(list(zip(output_neurons, targets))):
            neuron.propagate(rate, target)

        for neuron in reversed(self.hidden_neurons):
            neuron.propagate(rate)

    def clear(self) -> None:
        """Clear the traces and errors of every neuron (weights are kept)."""
        for neuron in self._neurons.values():
            neuron.clear()

    def reset(self) -> None:
        """Reset every neuron: clear it and re-randomize its weights and bias."""
        for neuron in self._neurons.values():
            neuron.reset()

    def to_genome(self) -> Genome:
        """
        Describe the network as a Genome.

        Neuron genes follow the construction order of the neurons, connection genes
        follow the order of 'connections()'. Endpoints and gaters are recorded as
        positions in the neuron list.
        """
        neurons   = self.neurons()
        positions = {neuron.id: i for i, neuron in enumerate(neurons)}

        neuron_genes = [NeuronGene(neuron.bias, neuron.squash, neuron.layer) for neuron in neurons]
        conn_genes   = [ConnectionGene(positions[conn.from_id],
                                       positions[conn.to_id],
                                       conn.weight,
                                       positions.get(conn.gater_id))
                        for conn in self.connections()]

        return Genome(neuron_genes, conn_genes)

    @classmethod
    def from_genome(cls, genome: Genome, rng: Optional[random.Random] = None) -> 'Network':
        """
        Build a network from a Genome.

        Parameters:
            genome: the genome describing the network
            rng:    source of randomness for the new network

        Returns:
            a network whose 'to_genome()' equals 'genome'

        Raises:
            InvalidReferenceError: if a connection gene refers to a missing neuron position
        """
        genome.validate()

        network = cls(rng)
        neurons = [network.add_neuron(gene.layer, gene.squash, gene.bias) for gene in genome.neuron_genes]

        gated = []
        for gene in genome.conn_genes:
            source = neurons[gene.from_index]
            target = neurons[gene.to_index]
            if source is target:
                connection = source.project(source)
                connection.weight = gene.weight
            else:
                connection = source.project(target, gene.weight)
            if gene.gater_index is not None:
                gated.append((neurons[gene.gater_index], connection))

        # gates are set once all connections exist, so that the extended traces are complete
        for gater, connection in gated:
            gater.gate(connection)

        return network

    def visualize(self, view: bool = True) -> graphviz.Digraph:
        """
        Visualize the network using Graphviz.

        Connections are drawn as solid edges labelled with their weight; gating
        relations are drawn as dashed edges from the gating neuron to the
        destination of the gated connection.

        Parameters:
            view: If True, automatically open the visualization after rendering

        Returns:
            graphviz.Digraph object representing the network
        """
        dot = graphviz.Digraph()
        dot.attr(rankdir='LR')  # Left to right layout
        dot.attr('graph', labelloc='t')

        common = {'color': 'black', 'style': 'filled', 'shape': 'circle', 'penwidth': '0.5',
                  'fontsize': '5', 'width': '0.5', 'height': '0.5', 'fixedsize': 'true'}
        fill   = {LayerType.INPUT: 'lightgrey', LayerType.HIDDEN: 'lightblue', LayerType.OUTPUT: 'white'}
        layout = {LayerType.INPUT: ('cluster_input', 'source', 'Inputs'),
                  LayerType.HIDDEN: ('cluster_hidden', 'same', 'Hidden'),
                  LayerType.OUTPUT: ('cluster_output', 'sink', 'Outputs')}

        for layer, (name, rank, label) in layout.items():
            neurons = self._layer(layer)
            if not neurons:
                continue
            with dot.subgraph(name=name) as cluster:
                cluster.attr(rank=rank, label=label, style='invisible')
                for neuron in neurons:
                    attrs = dict(common, fillcolor=fill[layer])
                    attrs['label'] = f"id={neuron.id}\\n{squash_codes[neuron.squash]}\\nbias={neuron.bias:.2f}"
                    cluster.node(str(neuron.id), **attrs)

        for conn in self.connections():
            edge_attrs = {
                'label'     : f"w={conn.weight:.2f}",
                'fontsize'  : '5',
                'penwidth'  : '0.5',
                'arrowsize' : '0.5',
                'labelfloat': 'false',
                'color'     : 'black'
            }
            dot.edge(str(conn.from_id), str(conn.to_id), **edge_attrs)

            if conn.gater_id is not None:
                dot.edge(str(conn.gater_id), str(conn.to_id),
                         style='dashed', color='gray', penwidth='0.5', arrowsize='0.5')

        if view:
            dot.view(cleanup=True)

        return dot

    def __str__(self):
        neurons_str     = "\n".join(f"  {neuron}" for neuron in self._neurons.values())
        connections_str = "\n".join(f"  {conn}" for conn in self.connections())
        return f"{neurons_str},\n\n{connections_str}"
