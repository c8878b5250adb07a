"""
Map normalised genome values to network parameters, and define the node transfer functions

Genome values are normalised to ``[0, 1]``. Each parameter is mapped linearly into a target range:

.. math::

    p = low + clip(g, 0, 1) \\cdot (high - low)

The default ranges are defined as module constants. Use a :py:class:`.ParameterMapper` to map into custom ranges.

Examples:
    >>> map_weight(0.5)
    0.0

    >>> mapper = ParameterMapper(weight_range=(-1.0, 1.0))
    >>> mapper.map_weight(1.0)
    1.0
"""

import numpy as np

from typing import Union, Callable, Optional

from ctrnn.errors import InvalidParameterError
from ctrnn.typehints import FloatVector, Range, TransferFunction

__all__ = [
    "WEIGHT_RANGE",
    "GAIN_RANGE",
    "BIAS_RANGE",
    "TIME_CONSTANT_RANGE",
    "SINE_COEFFICIENT_RANGE",
    "FREQUENCY_MULTIPLIER_RANGE",
    "ParameterMapper",
    "map_weight",
    "map_gain",
    "map_bias",
    "map_time_constant",
    "map_sine_coefficient",
    "map_frequency_multiplier",
    "tanh_sine_transfer_function",
    "tanh_transfer_function",
    "sigmoid_transfer_function",
    "get_transfer_function",
]

# - Default target ranges for mapped parameters
WEIGHT_RANGE = (-16.0, 16.0)
GAIN_RANGE = (1.0, 5.0)
BIAS_RANGE = (-16.0, 16.0)
TIME_CONSTANT_RANGE = (0.05, 2.0)
SINE_COEFFICIENT_RANGE = (0.0, 1.0)
FREQUENCY_MULTIPLIER_RANGE = (0.0, 10.0)


def _map_to_range(value: FloatVector, value_range: Range) -> FloatVector:
    low, high = value_range
    mapped = low + np.clip(value, 0.0, 1.0) * (high - low)

    # - Hand back python floats for scalar genome values
    return float(mapped) if np.ndim(mapped) == 0 else mapped


class ParameterMapper:
    """
    Map normalised genome values into configurable parameter ranges

    A :py:class:`.ParameterMapper` is stateless beyond its ranges; all methods are pure functions of their argument. Each method accepts a scalar or an array of genome values.
    """

    def __init__(
        self,
        weight_range: Range = WEIGHT_RANGE,
        gain_range: Range = GAIN_RANGE,
        bias_range: Range = BIAS_RANGE,
        time_constant_range: Range = TIME_CONSTANT_RANGE,
        sine_coefficient_range: Range = SINE_COEFFICIENT_RANGE,
        frequency_multiplier_range: Range = FREQUENCY_MULTIPLIER_RANGE,
    ):
        """
        Args:
            weight_range (Tuple[float, float]): ``(low, high)`` range for connection weights. Default: :py:data:`WEIGHT_RANGE`
            gain_range (Tuple[float, float]): ``(low, high)`` range for node gains. Default: :py:data:`GAIN_RANGE`
            bias_range (Tuple[float, float]): ``(low, high)`` range for node biases. Default: :py:data:`BIAS_RANGE`
            time_constant_range (Tuple[float, float]): ``(low, high)`` range for node time constants. Must be strictly positive. Default: :py:data:`TIME_CONSTANT_RANGE`
            sine_coefficient_range (Tuple[float, float]): ``(low, high)`` range for the amplitude of the sine term. Default: :py:data:`SINE_COEFFICIENT_RANGE`
            frequency_multiplier_range (Tuple[float, float]): ``(low, high)`` range for the frequency of the sine term. Default: :py:data:`FREQUENCY_MULTIPLIER_RANGE`
        """
        ranges = {
            "weight_range": weight_range,
            "gain_range": gain_range,
            "bias_range": bias_range,
            "time_constant_range": time_constant_range,
            "sine_coefficient_range": sine_coefficient_range,
            "frequency_multiplier_range": frequency_multiplier_range,
        }

        # - Check and assign each range
        for name, value_range in ranges.items():
            if len(value_range) != 2:
                raise InvalidParameterError(
                    f"`{name}` must be a `(low, high)` pair. Got {value_range}."
                )

            low, high = float(value_range[0]), float(value_range[1])
            if low > high:
                raise InvalidParameterError(
                    f"`{name}` must satisfy low <= high. Got ({low}, {high})."
                )

            setattr(self, name, (low, high))

        if self.time_constant_range[0] <= 0.0:
            raise InvalidParameterError(
                f"`time_constant_range` must be strictly positive. Got {self.time_constant_range}."
            )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(weight_range={self.weight_range}, gain_range={self.gain_range}, "
            f"bias_range={self.bias_range}, time_constant_range={self.time_constant_range}, "
            f"sine_coefficient_range={self.sine_coefficient_range}, "
            f"frequency_multiplier_range={self.frequency_multiplier_range})"
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, ParameterMapper):
            return NotImplemented

        return repr(self) == repr(other)

    def map_weight(self, value: FloatVector) -> FloatVector:
        """Map a genome value to a connection weight"""
        return _map_to_range(value, self.weight_range)

    def map_gain(self, value: FloatVector) -> FloatVector:
        """Map a genome value to a node gain"""
        return _map_to_range(value, self.gain_range)

    def map_bias(self, value: FloatVector) -> FloatVector:
        """Map a genome value to a node bias"""
        return _map_to_range(value, self.bias_range)

    def map_time_constant(self, value: FloatVector) -> FloatVector:
        """Map a genome value to a strictly positive node time constant"""
        return _map_to_range(value, self.time_constant_range)

    def map_sine_coefficient(self, value: FloatVector) -> FloatVector:
        """Map a genome value to the amplitude of the sine term"""
        return _map_to_range(value, self.sine_coefficient_range)

    def map_frequency_multiplier(self, value: FloatVector) -> FloatVector:
        """Map a genome value to the frequency of the sine term"""
        return _map_to_range(value, self.frequency_multiplier_range)


_default_mapper = ParameterMapper()

map_weight = _default_mapper.map_weight
map_gain = _default_mapper.map_gain
map_bias = _default_mapper.map_bias
map_time_constant = _default_mapper.map_time_constant
map_sine_coefficient = _default_mapper.map_sine_coefficient
map_frequency_multiplier = _default_mapper.map_frequency_multiplier


# -- Define node transfer functions
def tanh_sine_transfer_function(
    x: FloatVector,
    gain: FloatVector = 1.0,
    sine_coefficient: FloatVector = 0.0,
    frequency_multiplier: FloatVector = 1.0,
) -> FloatVector:
    """
    Saturating ``tanh`` response summed with a bounded oscillatory term

    .. math::

        f(x) = \\tanh(g x) + s \\sin(\\omega x)

    Args:
        x (FloatVector): Weighted input sum plus bias
        gain (FloatVector): Gain :math:`g` of the ``tanh`` term
        sine_coefficient (FloatVector): Amplitude :math:`s` of the sine term
        frequency_multiplier (FloatVector): Frequency :math:`\\omega` of the sine term

    Returns:
        FloatVector: The target activation, bounded by :math:`1 + |s|`
    """
    return np.tanh(gain * x) + sine_coefficient * np.sin(frequency_multiplier * x)


def tanh_transfer_function(
    x: FloatVector,
    gain: FloatVector = 1.0,
    sine_coefficient: FloatVector = 0.0,
    frequency_multiplier: FloatVector = 1.0,
) -> FloatVector:
    """Transfer function :math:`\\tanh(g x)`, ignoring the sine term"""
    return np.tanh(gain * x)


def sigmoid_transfer_function(
    x: FloatVector,
    gain: FloatVector = 1.0,
    sine_coefficient: FloatVector = 0.0,
    frequency_multiplier: FloatVector = 1.0,
) -> FloatVector:
    """Sigmoid transfer function :math:`(\\tanh(g x) + 1) / 2`, ignoring the sine term"""
    return (np.tanh(gain * x) + 1) / 2


def get_transfer_function(
    transfer_func: Optional[Union[str, Callable]] = None
) -> TransferFunction:
    """
    Look up a transfer function by name, or check a provided callable

    Args:
        transfer_func (Optional[Union[str, Callable]]): One of ``["tanh_sine", "tanh", "sigmoid"]``, or a function with signature ``f(x, gain, sine_coefficient, frequency_multiplier)``. Default: ``None``, use :py:func:`.tanh_sine_transfer_function`

    Returns:
        Callable: The transfer function
    """
    if transfer_func is None:
        return tanh_sine_transfer_function

    if isinstance(transfer_func, str):
        # - Handle a string argument
        if transfer_func.lower() in ["tanh_sine", "tanhsine", "ts"]:
            return tanh_sine_transfer_function
        elif transfer_func.lower() in ["tanh", "t"]:
            return tanh_transfer_function
        elif transfer_func.lower() in ["sigmoid", "sig", "s"]:
            return sigmoid_transfer_function
        else:
            raise ValueError(
                'If `transfer_func` is provided as a string argument, it must be one of ["tanh_sine", "tanh", "sigmoid"].'
            )

    elif callable(transfer_func):
        return transfer_func

    raise ValueError("Argument `transfer_func` must be a string or a function.")
