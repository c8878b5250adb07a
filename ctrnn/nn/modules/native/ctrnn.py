"""
Contains an implementation of a fully-connected continuous-time recurrent neural network
"""

# - ctrnn imports
from ctrnn.nn.modules.module import Module
from ctrnn.nn.modules.native.leaky_integrator import LeakyIntegratorNode
from ctrnn.parameters import SimulationParameter
from ctrnn.mapping import ParameterMapper, get_transfer_function
from ctrnn.configuration import CTRNNConfiguration
from ctrnn.errors import (
    ConfigurationMissingError,
    InvalidInputError,
    InvalidParameterError,
)

# -- Imports
import logging
import numpy as np
from copy import deepcopy
from warnings import warn

from typing import Optional, Union, Callable, List, Sequence, Any
from ctrnn.typehints import P_Callable

__all__ = ["CTRNN"]


class CTRNN(Module):
    """
    A continuous-time recurrent neural network of leaky-integrator nodes

    The network is composed of a set of input nodes, each receiving a single external input, and a set of hidden nodes. Every hidden node receives the outputs of all input nodes and of all hidden nodes, including itself. The outputs of the network are the outputs of the hidden nodes.

    Examples:
        Build a network from a genome and simulate one control cycle:

        >>> config = CTRNNConfiguration(
        ...     iNs=1,
        ...     hNs=1,
        ...     inputNodes=[NodeGenome([1.0], t=1.0)],
        ...     hiddenNodes=[NodeGenome([1.0, 0.5], t=1.0)],
        ... )
        >>> net = CTRNN()
        >>> net.set_configuration(config)
        >>> net.initialise(0.1)
        >>> net.feed_inputs([0.5])
        >>> net.update()
        >>> net.get_outputs()
        [0.0]

        The hidden node sees only the outputs committed on the previous step, so its output stays zero on the first update.

        Simulate a whole input time series ``(T, num_input_nodes)``:

        >>> output, state, record = net(input_data, record=True)

    Each call to :py:meth:`.update` is synchronous: every node first computes a candidate output from the outputs committed on the previous step, and only then do all nodes commit. The result of an update does not depend on the order of the nodes.
    """

    def __init__(
        self,
        configuration: Optional[Any] = None,
        mapper: Optional[ParameterMapper] = None,
        transfer_func: Optional[Union[str, Callable]] = None,
        *args,
        **kwargs,
    ):
        """
        Instantiate an empty CTRNN

        Nodes are only created by :py:meth:`.initialise`.

        Args:
            configuration (Optional[Any]): An optional configuration to set. See :py:class:`.CTRNNConfiguration`. Default: ``None``, no configuration
            mapper (Optional[ParameterMapper]): The mapper used to convert genome values to node parameters. Default: a :py:class:`.ParameterMapper` with the default ranges
            transfer_func (Optional[Union[str, Callable]]): The transfer function used by every node. Default: ``"tanh_sine"``
        """
        super().__init__(shape=(0, 0), *args, **kwargs)

        self.configuration = configuration
        """ The last configuration set for this network """

        self.mapper: ParameterMapper = SimulationParameter(
            ParameterMapper() if mapper is None else mapper
        )
        """ The :py:class:`.ParameterMapper` used on initialisation """

        self.transfer_func: P_Callable = SimulationParameter(
            get_transfer_function(transfer_func)
        )
        """ The transfer function of every node """

        self.input_nodes: List[LeakyIntegratorNode] = []
        """ The input nodes of this network, in order """

        self.hidden_nodes: List[LeakyIntegratorNode] = []
        """ The hidden (and output) nodes of this network, in order """

        self.dt: Optional[float] = None
        """ The Euler solver time step used by every node """

        self.num_input_nodes: int = 0
        self.num_hidden_nodes: int = 0
        self.num_output_nodes: int = 0
        self.num_nodes: int = 0

    def set_configuration(self, configuration: Any):
        """
        Set the configuration used by :py:meth:`.initialise`

        Args:
            configuration (Any): A :py:class:`.CTRNNConfiguration`, or a mapping / object with the same fields. Not validated here.
        """
        self.configuration = configuration

    def get_configuration(self) -> Any:
        """Any: The last configuration set for this network"""
        return self.configuration

    def _build_nodes(self, config: CTRNNConfiguration, dt: float):
        """
        Map a configuration to lists of input and hidden nodes

        Returns:
            (List[LeakyIntegratorNode], List[LeakyIntegratorNode]): input_nodes, hidden_nodes
        """
        num_nodes = config.iNs + config.hNs
        mapper = self.mapper

        if len(config.inputNodes) != config.iNs:
            raise InvalidParameterError(
                f"Configuration declares {config.iNs} input nodes, but provides {len(config.inputNodes)} input node genomes."
            )

        if len(config.hiddenNodes) != config.hNs:
            raise InvalidParameterError(
                f"Configuration declares {config.hNs} hidden nodes, but provides {len(config.hiddenNodes)} hidden node genomes."
            )

        def node_args(genome) -> dict:
            return {
                "gain": mapper.map_gain(genome.gain),
                "bias": mapper.map_bias(genome.bias),
                "tau": mapper.map_time_constant(genome.t),
                "sine_coefficient": mapper.map_sine_coefficient(genome.sine_coefficient),
                "frequency_multiplier": mapper.map_frequency_multiplier(
                    genome.frequency_multiplier
                ),
                "dt": dt,
                "transfer_func": self.transfer_func,
            }

        # - Input nodes only have a single input
        input_nodes = []
        for i, genome in enumerate(config.inputNodes):
            if len(genome.w) < 1:
                raise InvalidParameterError(f"Input node {i} has no weight.")

            input_nodes.append(
                LeakyIntegratorNode(
                    1, weights=[mapper.map_weight(genome.w[0])], **node_args(genome)
                )
            )

        # - Hidden nodes receive all input and hidden node outputs, including their own
        hidden_nodes = []
        for i, genome in enumerate(config.hiddenNodes):
            if len(genome.w) != num_nodes:
                raise InvalidParameterError(
                    f"Hidden node {i} must have {num_nodes} weights (one per input and hidden node). Got {len(genome.w)}."
                )

            hidden_nodes.append(
                LeakyIntegratorNode(
                    num_nodes,
                    weights=mapper.map_weight(np.array(genome.w)),
                    **node_args(genome),
                )
            )

        return input_nodes, hidden_nodes

    def initialise(self, dt: float):
        """
        Create and populate all nodes from the current configuration

        Any existing nodes are discarded first. If initialisation fails, the network is left empty.

        Args:
            dt (float): The Euler solver time step used by every node
        """
        self.reset(True)

        if self.configuration is None:
            raise ConfigurationMissingError("No configuration set for CTRNN.")

        if not dt > 0.0:
            raise InvalidParameterError(f"`dt` must be strictly positive. Got {dt}.")

        config = CTRNNConfiguration.from_dict(self.configuration)
        input_nodes, hidden_nodes = self._build_nodes(config, dt)

        # - Record the network dimensions
        self.num_input_nodes = config.iNs
        self.num_hidden_nodes = config.hNs
        self.num_output_nodes = config.hNs
        self.num_nodes = self.num_input_nodes + self.num_hidden_nodes
        self._shape = (self.num_input_nodes, self.num_output_nodes)
        self.dt = float(dt)

        # - Register nodes as submodules
        for i, node in enumerate(input_nodes):
            setattr(self, f"input_{i}", node)
        for i, node in enumerate(hidden_nodes):
            setattr(self, f"hidden_{i}", node)

        self.input_nodes = input_nodes
        self.hidden_nodes = hidden_nodes

        logging.info(
            f"CTRNN initialised with {self.num_input_nodes} input nodes and {self.num_hidden_nodes} hidden nodes, dt = {self.dt}"
        )
        self._check_step_ratio()

    def _check_step_ratio(self):
        unstable = [
            node.name
            for node in self.input_nodes + self.hidden_nodes
            if node.step_ratio > 1.0
        ]

        if unstable:
            warn(
                f"Time step dt = {self.dt} is larger than the time constant of nodes {', '.join(unstable)}. The Euler solver will overshoot for these nodes.",
                RuntimeWarning,
            )

    def feed_inputs(self, values: Sequence[float]):
        """
        Set the external input of every input node

        All required entries are checked before any input is changed. Entries beyond ``num_input_nodes`` are ignored.

        Args:
            values (Sequence[float]): Input values, at least one per input node
        """
        if len(values) < self.num_input_nodes:
            raise InvalidInputError(
                f"Too few inputs for CTRNN configuration. Expected {self.num_input_nodes}, got {len(values)}."
            )

        checked_values = []
        for index in range(self.num_input_nodes):
            value = values[index]

            if isinstance(value, (str, bytes)):
                raise InvalidInputError(f"Input {index} is not numeric: {value!r}.")

            try:
                value = float(value)
            except (TypeError, ValueError) as err:
                raise InvalidInputError(
                    f"Input {index} is not numeric: {value!r}."
                ) from err

            if not np.isfinite(value):
                raise InvalidInputError(f"Input {index} is not a finite number: {value}.")

            checked_values.append(value)

        for node, value in zip(self.input_nodes, checked_values):
            node.set_input(0, value)

    def update(self):
        """
        Advance the network by one time step

        All candidate outputs are computed from the outputs committed on the previous step, then all nodes commit.
        """
        # - Input node candidates, from the inputs set by `feed_inputs`
        for node in self.input_nodes:
            node.compute_candidate_output()

        # - Snapshot of the committed outputs: input nodes first, then hidden nodes
        previous_outputs = np.array(
            [node.output for node in self.input_nodes + self.hidden_nodes], "float"
        )

        # - Hidden node candidates, each reading the snapshot (including its own output)
        for node in self.hidden_nodes:
            node.inputs = previous_outputs.copy()
            node.compute_candidate_output()

        # - Commit all candidates
        for node in self.input_nodes + self.hidden_nodes:
            node.commit()

    def get_outputs(self) -> List[float]:
        """List[float]: The committed outputs of the hidden nodes, in order"""
        return [self.hidden_nodes[i].get_output() for i in range(self.num_output_nodes)]

    def reset(self, clear_all: bool = False):
        """
        Reset this network

        Args:
            clear_all (bool): If ``True``, discard all nodes; the configuration is retained. If ``False``, zero the outputs of every node, keeping weights and parameters. Default: ``False``
        """
        if clear_all:
            for name in list(self.modules()):
                delattr(self, name)

            self.input_nodes = []
            self.hidden_nodes = []
            self.num_input_nodes = 0
            self.num_hidden_nodes = 0
            self.num_output_nodes = 0
            self.num_nodes = 0
            self._shape = (0, 0)

            logging.info("CTRNN nodes cleared")
        else:
            self.reset_state()

    def change_timestep(self, dt: float):
        """
        Change the Euler solver time step of every node, without resetting state

        Args:
            dt (float): The new time step
        """
        if not dt > 0.0:
            raise InvalidParameterError(f"`dt` must be strictly positive. Got {dt}.")

        for node in self.input_nodes + self.hidden_nodes:
            node.set_timestep(dt)

        self.dt = float(dt)
        self._check_step_ratio()

    def evolve(
        self,
        input_data: np.ndarray,
        record: bool = False,
    ):
        """
        Evolve the network over a time series of inputs

        Each batch is evolved from the current state of the network. After evolution the network holds the final state of the first batch.

        Args:
            input_data (np.ndarray): Input data ``(T, num_input_nodes)`` or ``(batches, T, num_input_nodes)``
            record (bool): If ``True``, record the outputs of the input nodes as well. Default: ``False``

        Returns:
            (np.ndarray, dict, dict): output ``(batches, T, num_output_nodes)``, new_state, record_dict
        """
        if not self.hidden_nodes:
            raise ConfigurationMissingError(
                "CTRNN must be initialised before it can be evolved."
            )

        input_data = self._auto_batch(input_data)
        batches, num_timesteps, _ = input_data.shape

        initial_state = deepcopy(self.state())
        final_state = None

        input_outputs = np.zeros((batches, num_timesteps, self.num_input_nodes))
        outputs = np.zeros((batches, num_timesteps, self.num_output_nodes))

        for b in range(batches):
            self.set_attributes(deepcopy(initial_state))

            for t in range(num_timesteps):
                self.feed_inputs(input_data[b, t, :])
                self.update()

                input_outputs[b, t, :] = [node.output for node in self.input_nodes]
                outputs[b, t, :] = self.get_outputs()

            if b == 0:
                final_state = deepcopy(self.state())

        self.set_attributes(final_state)

        record_dict = (
            {"input_outputs": input_outputs, "hidden_outputs": np.copy(outputs)}
            if record
            else {}
        )

        return outputs, deepcopy(self.state()), record_dict
