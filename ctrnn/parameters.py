"""
Registered attribute wrappers for nodes and networks

Assigning one of these wrappers to an attribute of a :py:class:`.Module` registers the attribute, fixes its shape and records how to re-initialise it.
"""

from copy import deepcopy
from typing import Any, Callable, Optional, Tuple, Union

import numpy as np

__all__ = ["Parameter", "State", "SimulationParameter"]


class ParameterBase:
    """
    Base class for registered attributes

    Either concrete ``data`` is given, in which case re-initialisation restores a copy of it, or ``shape`` and ``init_func`` are given and the data is built by calling ``init_func(shape)``.
    """

    def __init__(
        self,
        data: Any = None,
        family: Optional[str] = None,
        init_func: Optional[Callable[[Tuple], Any]] = None,
        shape: Optional[Union[Tuple, int]] = None,
    ):
        """
        Args:
            data (Any): Concrete initial value. Default: ``None``, build the value from ``init_func``
            family (Optional[str]): Group name used to select attributes, e.g. ``"weights"``, ``"taus"``
            init_func (Optional[Callable]): ``f(shape) -> value``, used when ``data`` is not given and when the attribute is reset
            shape (Optional[Union[Tuple, int]]): Required shape of the value
        """
        if isinstance(shape, (int, np.integer)):
            shape = (int(shape),)

        if shape is not None and not isinstance(shape, tuple):
            raise TypeError(
                f"`shape` must be a tuple or an integer. Got a {type(shape).__name__}."
            )

        if data is None:
            if shape is None or init_func is None:
                raise ValueError(
                    f"A {type(self).__name__} needs either concrete `data`, or both `shape` and `init_func`."
                )

            data = init_func(shape)
        else:
            if shape is not None and np.shape(data) != shape:
                raise ValueError(
                    f"{type(self).__name__} data of shape {np.shape(data)} does not match the required shape {shape}."
                )

            initial = deepcopy(data)
            init_func = lambda _: deepcopy(initial)

        self.data = data
        self.family = family
        self.init_func = init_func
        self.shape: Tuple = np.shape(data)

    def __repr__(self):
        return f"{type(self).__name__}(data={self.data}, family={self.family}, shape={self.shape})"


class Parameter(ParameterBase):
    """
    A configuration value of the dynamical system: weights, gains, biases, time constants and sine-term coefficients
    """

    pass


class State(ParameterBase):
    """
    A transient dynamical value: node inputs, committed output and candidate output
    """

    pass


class SimulationParameter(ParameterBase):
    """
    A solver setting that is not part of the evolved configuration, such as the time step or the transfer function
    """

    pass
