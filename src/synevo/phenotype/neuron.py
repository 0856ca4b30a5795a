"""
Neuron Module

This module implements the Neuron class, the computational node of a network.
Neurons can be connected to one another, can gate the connections between other
neurons, and support four basic operations: project, gate, activate, propagate.

Learning follows the local credit-assignment scheme of LSTM-g: every neuron
keeps an eligibility trace for each of its incoming connections and, for each
neuron it gates, an extended eligibility trace. Weight updates only need these
traces and the error responsibilities of neighbouring neurons, so no unrolling
through time is required.

Classes:
    ErrorTerms: The error responsibilities of a neuron
    Connected:  Named tuple describing how two neurons are connected
    Neuron:     A computational node holding activation state and learning traces
"""

from typing import NamedTuple, Optional, TYPE_CHECKING

from synevo.activations          import SquashKind, squash
from synevo.errors               import GatingConflictError, InvalidReferenceError
from synevo.genotype.neuron_gene import LayerType
from synevo.phenotype.connection import Connection, ConnectionKind

if TYPE_CHECKING:
    from synevo.phenotype.network import Network

# learning rate used by 'propagate' when none is given
DEFAULT_RATE = 0.1

class ErrorTerms:
    """
    Error responsibilities of a neuron, as computed during back-propagation.

    Public Attributes:
        responsibility: total error responsibility (projected + gated)
        projected:      responsibility coming from the connections the neuron projects
        gated:          responsibility coming from the connections the neuron gates
    """

    def __init__(self):
        self.responsibility: float = 0.0
        self.projected     : float = 0.0
        self.gated         : float = 0.0

    def clear(self) -> None:
        self.responsibility = self.projected = self.gated = 0.0

    def __repr__(self):
        return (f"ErrorTerms(responsibility={self.responsibility}, "
                f"projected={self.projected}, gated={self.gated})")

class Connected(NamedTuple):
    """The relation linking two neurons, and the connection realizing it."""
    kind      : ConnectionKind
    connection: Connection

class Neuron:
    """
    A computational node (neuron) of a network.

    The neuron state accumulates the bias, its own previous state (through the
    self-connection) and the weighted, gain-modulated activations of the neurons
    projecting to it:

        state      = self_gain * self_weight * state + bias + sum(activation(from) * weight * gain)
        activation = squash(state)

    Input neurons skip this computation altogether: they output whatever value
    they are given.

    The self-connection always exists; a weight of 0 means the neuron is not
    recurrent. Neurons refer to one another by ID, resolved through the network
    that owns them.

    Public Attributes:
        id:             Unique (within the owning network) neuron ID
        layer:          Layer the neuron belongs to (INPUT, HIDDEN or OUTPUT)
        squash:         Squashing function applied to the state
        bias:           Bias added to the state
        state:          Current state
        old_state:      State before the last activation
        activation:     Output of the neuron (squashed state)
        derivative:     Derivative of the squashing function at the current state
        self_connection: The recurrent connection from the neuron to itself
        inputs:         Incoming connections, by connection ID
        projected:      Outgoing connections, by connection ID
        gated:          Connections gated by this neuron, by connection ID
        eligibility:    Eligibility trace of each incoming connection, by connection ID
        extended:       For each gated neuron ID, the extended eligibility trace of each incoming connection
        influences:     For each gated neuron ID, the connections into it gated by this neuron
        error:          Error responsibilities

    Public Methods:
        activate(input):         Compute (or set) the activation and update the traces
        propagate(rate, target): Back-propagate the error and adjust incoming weights and bias
        project(neuron, weight): Connect this neuron to another one
        gate(connection):        Let this neuron's activation control the gain of a connection
        connected(neuron):       Describe how this neuron is connected to another one
        is_self_connected():     Whether the self-connection has a non-zero weight
        clear():                 Forget traces and errors, keep weights
        reset():                 Forget traces and errors, and re-randomize weights and bias
    """

    def __init__(self,
                 network: 'Network',
                 layer  : LayerType       = LayerType.HIDDEN,
                 squash : SquashKind      = SquashKind.LOGISTIC,
                 bias   : Optional[float] = None):
        """
        Create a neuron and register it with 'network'.

        Parameters:
            network: the network owning this neuron
            layer:   layer the neuron belongs to
            squash:  squashing function applied to the state
            bias:    bias added to the state; drawn from uniform(-0.1, 0.1) if not given
        """
        self._network: 'Network' = network
        self.id      : int       = network.ids.neuron_id()
        network._register(self)

        self.layer : LayerType  = layer
        self.squash: SquashKind = squash

        self.state     : float = 0.0
        self.old_state : float = 0.0
        self.activation: float = 0.0
        self.derivative: float = 0.0

        self.inputs   : dict[int, Connection] = {}   # connection ID => connection
        self.projected: dict[int, Connection] = {}   # connection ID => connection
        self.gated    : dict[int, Connection] = {}   # connection ID => connection

        self.eligibility: dict[int, float]            = {}   # connection ID => trace
        self.extended   : dict[int, dict[int, float]] = {}   # neuron ID => connection ID => trace
        self.influences : dict[int, list[Connection]] = {}   # neuron ID => gated connections into it

        self.error: ErrorTerms = ErrorTerms()

        # weight = 0 -> not connected
        self.self_connection: Connection = Connection(network, self.id, self.id, 0.0)

        self.bias: float = network.rng.random() * .2 - .1 if bias is None else bias

    def _neuron(self, neuron_id: int) -> 'Neuron':
        return self._network.neuron(neuron_id)

    def _influence(self, neuron_id: int) -> float:
        """
        The effect this neuron has, through the connections it gates, on the
        state of the gated neuron 'neuron_id'.
        """
        neuron = self._neuron(neuron_id)

        # if the gated neuron's self-connection is gated by this neuron, its old state counts
        influence = neuron.old_state if neuron.self_connection.gater_id == self.id else 0.0

        for connection in self.influences.get(neuron_id, []):
            influence += connection.weight * self._neuron(connection.from_id).activation
        return influence

    def activate(self, input: Optional[float] = None) -> float:
        """
        Activate the neuron.

        If 'input' is given (input neurons) the activation is set to it directly,
        bypassing the squashing function. Otherwise the state is computed from the
        incoming connections and squashed, then the eligibility traces and the gains
        of the gated connections are updated.

        Parameters:
            input: the activation to set (for input neurons)

        Returns:
            the new activation
        """
        # activation from the environment
        if input is not None:
            self.activation = input
            self.derivative = 0.0
            self.bias       = 0.0
            return self.activation

        self.old_state = self.state

        self_gain   = self.self_connection.gain
        self_weight = self.self_connection.weight

        state = self_gain * self_weight * self.state + self.bias
        for connection in self.inputs.values():
            state += self._neuron(connection.from_id).activation * connection.weight * connection.gain
        self.state = state

        self.activation = float(squash(self.squash, state))
        self.derivative = float(squash(self.squash, state, derivate=True))

        # influences must be computed before any trace changes
        influences = {neuron_id: self._influence(neuron_id) for neuron_id in self.extended}

        for connection in self.inputs.values():
            source = self._neuron(connection.from_id)

            # eligibility trace
            self.eligibility[connection.id] = (self_gain * self_weight * self.eligibility[connection.id] +
                                               connection.gain * source.activation)

            # extended eligibility traces
            for neuron_id, xtrace in self.extended.items():
                gated_self = self._neuron(neuron_id).self_connection
                xtrace[connection.id] = (gated_self.gain * gated_self.weight * xtrace[connection.id] +
                                         self.derivative * self.eligibility[connection.id] * influences[neuron_id])

        for connection in self.gated.values():
            connection.gain = self.activation

        return self.activation

    def propagate(self, rate: Optional[float] = None, target: Optional[float] = None) -> None:
        """
        Back-propagate the error and learn.

        Output neurons are given their 'target' and take their error from it;
        every other neuron computes its error responsibility from the neurons it
        projects to and the neurons it gates. Incoming weights and the bias are
        then adjusted by 'rate' times their gradient.

        Parameters:
            rate:   learning rate (DEFAULT_RATE if not given)
            target: expected activation (output neurons only)
        """
        if target is not None:
            self.error.responsibility = self.error.projected = target - self.activation

        else:
            error = 0.0
            for connection in self.projected.values():
                neuron = self._neuron(connection.to_id)
                error += neuron.error.responsibility * connection.gain * connection.weight
            self.error.projected = self.derivative * error

            error = 0.0
            for neuron_id in self.extended:
                error += self._neuron(neuron_id).error.responsibility * self._influence(neuron_id)
            self.error.gated = self.derivative * error

            self.error.responsibility = self.error.projected + self.error.gated

        if rate is None:
            rate = DEFAULT_RATE

        for connection in self.inputs.values():
            gradient = self.error.projected * self.eligibility[connection.id]
            for neuron_id, xtrace in self.extended.items():
                gradient += self._neuron(neuron_id).error.responsibility * xtrace[connection.id]
            connection.weight += rate * gradient

        self.bias += rate * self.error.responsibility

    def project(self, neuron: 'Neuron', weight: Optional[float] = None) -> Connection:
        """
        Project a connection from this neuron to 'neuron'.

        Projecting onto itself turns the self-connection on (weight 1). Projecting
        twice onto the same neuron does not create a second connection: the
        existing one is returned, with its weight updated if one is given.

        Parameters:
            neuron: the destination neuron
            weight: weight of the connection (random if not given)

        Returns:
            the connection from this neuron to 'neuron'

        Raises:
            InvalidReferenceError: if 'neuron' belongs to a different network
        """
        if neuron is self:
            self.self_connection.weight = 1.0
            return self.self_connection

        if not self._network.owns(neuron):
            raise InvalidReferenceError(f"Neuron {neuron.id} does not belong to this network")

        existing = next((c for c in self.projected.values() if c.to_id == neuron.id), None)
        if existing is not None:
            if weight is not None:
                existing.weight = weight
            return existing

        connection = Connection(self._network, self.id, neuron.id, weight)

        self.projected[connection.id]     = connection
        neuron.inputs[connection.id]      = connection
        neuron.eligibility[connection.id] = 0.0
        for xtrace in neuron.extended.values():
            xtrace[connection.id] = 0.0

        return connection

    def gate(self, connection: Connection) -> None:
        """
        Gate 'connection': from now on its gain follows this neuron's activation.

        Parameters:
            connection: a connection between two neurons of this network

        Raises:
            GatingConflictError: if the connection is already gated by another neuron
        """
        if connection.gater_id == self.id:
            return
        if connection.gater_id is not None:
            raise GatingConflictError(f"Connection {connection.id} is already gated by neuron {connection.gater_id}")

        neuron_id = self._neuron(connection.to_id).id
        self.gated[connection.id] = connection

        if neuron_id not in self.extended:
            self.extended[neuron_id] = {input_id: 0.0 for input_id in self.inputs}

        self.influences.setdefault(neuron_id, []).append(connection)
        connection.gater_id = self.id

    def is_self_connected(self) -> bool:
        return self.self_connection.weight != 0

    def connected(self, neuron: 'Neuron') -> Optional[Connected]:
        """
        Find how this neuron is connected to 'neuron'.

        Returns:
            the kind of relation and the connection realizing it, or None if the
            two neurons are not connected
        """
        if neuron is self:
            if self.is_self_connected():
                return Connected(ConnectionKind.SELF, self.self_connection)
            return None

        for kind, connections in ((ConnectionKind.INPUTS,    self.inputs),
                                  (ConnectionKind.PROJECTED, self.projected),
                                  (ConnectionKind.GATED,     self.gated)):
            for connection in connections.values():
                if connection.to_id == neuron.id or connection.from_id == neuron.id:
                    return Connected(kind, connection)
        return None

    def clear(self) -> None:
        """
        Forget the context: zero all traces and errors, leave weights untouched.
        """
        for connection_id in self.eligibility:
            self.eligibility[connection_id] = 0.0

        for xtrace in self.extended.values():
            for connection_id in xtrace:
                xtrace[connection_id] = 0.0

        self.error.clear()

    def reset(self) -> None:
        """
        Clear the neuron, then re-randomize the weights of all its connections
        and its bias, and zero its state.
        """
        self.clear()

        rng = self._network.rng
        for connections in (self.inputs, self.projected, self.gated):
            for connection in connections.values():
                connection.weight = rng.random() * .2 - .1

        self.bias = rng.random() * .2 - .1
        self.old_state = self.state = self.activation = 0.0

    def __str__(self):
        return f"Neuron({self.id:03d}, LayerType.{self.layer.name:6s}, {self.squash.name}, bias={self.bias:+.4f})"

    def __repr__(self):
        return (f"Neuron(id={self.id}, layer=LayerType.{self.layer.name}, "
                f"squash=SquashKind.{self.squash.name}, bias={self.bias})")
