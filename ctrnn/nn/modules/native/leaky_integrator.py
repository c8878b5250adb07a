"""
Contains an implementation of a single leaky-integrator neuron
"""

# - ctrnn imports
from ctrnn.nn.modules.module import Module
from ctrnn.parameters import Parameter, State, SimulationParameter
from ctrnn.mapping import get_transfer_function
from ctrnn.errors import InvalidParameterError

# -- Imports
import numpy as np
from copy import deepcopy

from typing import Optional, Union, Callable
from ctrnn.typehints import FloatVector, P_float, P_ndarray, P_Callable

__all__ = ["LeakyIntegratorNode"]


class LeakyIntegratorNode(Module):
    """
    A single leaky-integrator neuron with a two-phase candidate / commit update

    Examples:
        Instantiate a node with two inputs:

        >>> node = LeakyIntegratorNode(2, weights=[1.0, -0.5], tau=0.5, dt=0.1)
        >>> node
        LeakyIntegratorNode  with shape (2, 1)

        Advance the node by one step:

        >>> node.set_input(0, 1.0)
        >>> node.compute_candidate_output()
        0.1523...
        >>> node.commit()
        >>> node.get_output()
        0.1523...

    This module implements the update equations:

    .. math::

        x = \\sum_i w_i \\cdot in_i + b

        y' = y + \\frac{dt}{\\tau} (f(x) - y)

    where :math:`f` is the transfer function, evaluated with the node gain, sine coefficient and frequency multiplier. :math:`y'` is held in :py:attr:`.temp_output` by :py:meth:`.compute_candidate_output`, and only becomes :py:attr:`.output` on :py:meth:`.commit`.
    """

    def __init__(
        self,
        num_inputs: int = 1,
        weights: Optional[FloatVector] = None,
        gain: float = 1.0,
        bias: float = 0.0,
        tau: float = 1.0,
        sine_coefficient: float = 0.0,
        frequency_multiplier: float = 1.0,
        dt: float = 0.01,
        transfer_func: Optional[Union[str, Callable]] = None,
        *args,
        **kwargs,
    ):
        """
        Instantiate a leaky-integrator node

        Args:
            num_inputs (int): The number of inputs to this node. Default: ``1``
            weights (Optional[FloatVector]): A vector ``(num_inputs,)`` of weights, paired positionally with the inputs. Default: all zeros
            gain (float): Gain of the transfer function. Default: ``1.``
            bias (float): Bias added to the weighted input sum. Default: ``0.``
            tau (float): Time constant of the node. Must be strictly positive. Default: ``1.``
            sine_coefficient (float): Amplitude of the sine term of the transfer function. Default: ``0.``
            frequency_multiplier (float): Frequency of the sine term of the transfer function. Default: ``1.``
            dt (float): The Euler solver time step. Default: ``0.01``
            transfer_func (Optional[Union[str, Callable]]): The transfer function of the node, provided as a string ``["tanh_sine", "tanh", "sigmoid"]`` or as a function ``f(x, gain, sine_coefficient, frequency_multiplier)``. Default: ``"tanh_sine"``
        """
        num_inputs = int(num_inputs)
        if num_inputs < 1:
            raise InvalidParameterError(
                f"A node must have at least one input. Got {num_inputs}."
            )

        super().__init__(shape=(num_inputs, 1), *args, **kwargs)

        # - Check dynamical parameters before registering them
        if weights is not None and np.size(weights) != num_inputs:
            raise InvalidParameterError(
                f"`weights` must have {num_inputs} elements, one per input. Got {np.size(weights)}."
            )

        if not tau > 0.0:
            raise InvalidParameterError(
                f"`tau` must be strictly positive. Got {tau}."
            )

        if not dt > 0.0:
            raise InvalidParameterError(f"`dt` must be strictly positive. Got {dt}.")

        self.num_inputs: int = num_inputs
        """The number of inputs to this node"""

        # - Set parameters
        self.weights: P_ndarray = Parameter(
            None if weights is None else np.array(weights, "float").flatten(),
            family="weights",
            shape=(num_inputs,),
            init_func=np.zeros,
        )
        """ The vector ``(num_inputs,)`` of weights for each input """

        self.gain: P_float = Parameter(float(gain), family="gains")
        """ The gain of the transfer function """

        self.bias: P_float = Parameter(float(bias), family="biases")
        """ The bias added to the weighted input sum """

        self.tau: P_float = Parameter(float(tau), family="taus")
        """ The time constant :math:`\\tau` of this node """

        self.sine_coefficient: P_float = Parameter(
            float(sine_coefficient), family="sines"
        )
        """ The amplitude of the sine term of the transfer function """

        self.frequency_multiplier: P_float = Parameter(
            float(frequency_multiplier), family="sines"
        )
        """ The frequency of the sine term of the transfer function """

        # - Initialise state
        self.inputs: P_ndarray = State(
            shape=(num_inputs,), family="inputs", init_func=np.zeros
        )
        """ The vector ``(num_inputs,)`` of current input values """

        self.output: P_float = State(shape=(), init_func=lambda _: 0.0)
        """ The committed output from the last completed update """

        self.temp_output: P_float = State(shape=(), init_func=lambda _: 0.0)
        """ The candidate output, valid between :py:meth:`.compute_candidate_output` and :py:meth:`.commit` """

        # - Simulation parameters
        self.dt: P_float = SimulationParameter(float(dt))
        """ The Euler solver time step for this node """

        self.transfer_func: P_Callable = SimulationParameter(
            get_transfer_function(transfer_func)
        )
        """ The transfer function of this node """

    def set_input(self, index: int, value: float):
        """
        Set a single input of this node

        Args:
            index (int): The input index, in ``[0, num_inputs)``
            value (float): The new input value
        """
        if not 0 <= index < self.num_inputs:
            raise IndexError(
                f"Input index {index} out of range for a node with {self.num_inputs} inputs."
            )

        self.inputs[index] = value

    def weighted_input(self) -> float:
        """float: The weighted sum of the current inputs, plus bias"""
        return float(np.dot(self.inputs, self.weights) + self.bias)

    def compute_candidate_output(self) -> float:
        """
        Compute the output of this node for the next time step, without committing it

        The candidate output is stored in :py:attr:`.temp_output`; :py:attr:`.output` is not modified.

        Returns:
            float: The candidate output
        """
        if not self.tau > 0.0:
            raise InvalidParameterError(
                f"`tau` must be strictly positive. Got {self.tau}."
            )

        target = self.transfer_func(
            self.weighted_input(),
            self.gain,
            self.sine_coefficient,
            self.frequency_multiplier,
        )

        # - Single forward Euler step towards the target activation
        self.temp_output = float(
            self.output + (self.dt / self.tau) * (target - self.output)
        )
        return self.temp_output

    def commit(self):
        """
        Commit the candidate output as the output of this node
        """
        self.output = self.temp_output

    def get_output(self) -> float:
        """float: The committed output of this node"""
        return float(self.output)

    def reset_state(self) -> "LeakyIntegratorNode":
        """
        Zero the committed and candidate outputs of this node

        Weights, parameters and inputs are left untouched.

        Returns:
            LeakyIntegratorNode: The updated node, for compatibility with the functional API
        """
        self._reset_attribute("output")
        self._reset_attribute("temp_output")
        return self

    def set_timestep(self, dt: float):
        """
        Change the Euler solver time step of this node, without modifying its state

        Args:
            dt (float): The new time step. Must be strictly positive
        """
        if not dt > 0.0:
            raise InvalidParameterError(f"`dt` must be strictly positive. Got {dt}.")

        self.dt = float(dt)

    @property
    def step_ratio(self) -> float:
        """float: The fraction ``dt / tau`` of the distance to the target covered in one step"""
        return self.dt / self.tau

    def evolve(
        self,
        input_data: np.ndarray,
        record: bool = False,
    ):
        """
        Evolve this node over a time series of inputs

        Each batch is evolved from the current state of the node. After evolution the node holds the final state of the first batch.

        Args:
            input_data (np.ndarray): Input data ``(T, num_inputs)`` or ``(batches, T, num_inputs)``
            record (bool): If ``True``, record the weighted input sum at each step. Default: ``False``

        Returns:
            (np.ndarray, dict, dict): output ``(batches, T, 1)``, new_state, record_dict
        """
        input_data = self._auto_batch(input_data)
        batches, num_timesteps, _ = input_data.shape

        initial_state = deepcopy(self.state())
        final_state = None

        weighted_inputs = np.zeros((batches, num_timesteps, 1))
        outputs = np.zeros((batches, num_timesteps, 1))

        for b in range(batches):
            self.set_attributes(deepcopy(initial_state))

            for t in range(num_timesteps):
                self.inputs = np.array(input_data[b, t, :])
                weighted_inputs[b, t, 0] = self.weighted_input()
                self.compute_candidate_output()
                self.commit()
                outputs[b, t, 0] = self.output

            if b == 0:
                final_state = deepcopy(self.state())

        self.set_attributes(final_state)

        record_dict = {"weighted_input": weighted_inputs} if record else {}

        return outputs, deepcopy(self.state()), record_dict
