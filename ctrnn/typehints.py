"""
Module to provide useful types for ``ctrnn``
"""

import numpy as np
from typing import Union, Any, Callable, Mapping, Sequence

from ctrnn.parameters import ParameterBase

__all__ = [
    "P_float",
    "P_ndarray",
    "P_Callable",
    "FloatVector",
    "Range",
    "Genome",
    "TransferFunction",
]

P_float = Union[float, ParameterBase]
""" A Parameter or a float """

P_Callable = Union[Callable, ParameterBase]
""" A Parameter or a Callable """

P_ndarray = Union[np.ndarray, ParameterBase]
""" A Parameter or a numpy array """

FloatVector = Union[float, np.ndarray]
""" A float scalar or a float vector """

Range = Sequence[float]
""" A ``(low, high)`` pair bounding a mapped parameter """

Genome = Union[Mapping[str, Any], Any]
""" A node genome record, as a mapping or as an object with genome attributes """

TransferFunction = Callable[[FloatVector, FloatVector, FloatVector, FloatVector], FloatVector]
""" A transfer function ``f(x, gain, sine_coefficient, frequency_multiplier)`` """
