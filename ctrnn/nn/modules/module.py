"""
Contains the module base class for nodes and networks
"""

from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import numpy as np

from ctrnn.parameters import ParameterBase
from ctrnn.errors import InvalidInputError

__all__ = ["Module"]


class Module(ABC):
    """
    Base class for :py:class:`.LeakyIntegratorNode` and :py:class:`.CTRNN`

    Subclasses declare their configuration as :py:class:`.Parameter` attributes, their dynamical state as :py:class:`.State` attributes and their solver settings as :py:class:`.SimulationParameter` attributes. Assigning another :py:class:`.Module` to an attribute registers it as a sub-module.

    Registered attributes keep their shape: assigning a value of a different shape raises a ``ValueError``.
    """

    def __init__(self, shape: Optional[Union[Tuple, int]] = None):
        """
        Args:
            shape (Optional[Union[Tuple, int]]): The shape ``(size_in, size_out)`` of this module
        """
        # - Registries bypass `__setattr__`
        object.__setattr__(self, "_attributes", {})
        object.__setattr__(self, "_modules", OrderedDict())

        self._name: Optional[str] = None
        self._shape = tuple(shape) if isinstance(shape, Iterable) else (shape,)

    def __setattr__(self, name: str, val: Any):
        if isinstance(val, ParameterBase):
            if name in self._attributes:
                raise ValueError(f'Attribute "{name}" is already registered.')

            self._attributes[name] = {
                "kind": type(val).__name__,
                "family": val.family,
                "init_func": val.init_func,
                "shape": val.shape,
            }
            val = val.data

        elif name in self._attributes and val is not None:
            shape = self._attributes[name]["shape"]
            if np.shape(val) != shape:
                raise ValueError(
                    f"The new value assigned to {name} must be of shape {shape} (got {np.shape(val)})."
                )

        if isinstance(val, Module):
            val._name = name
            self._modules[name] = val

        object.__setattr__(self, name, val)

    def __delattr__(self, name: str):
        self._attributes.pop(name, None)
        self._modules.pop(name, None)
        object.__delattr__(self, name)

    def __repr__(self, indent: str = "") -> str:
        text = f"{indent}{type(self).__name__} {self.name} with shape {self._shape}"

        if self._modules:
            lines = [m.__repr__(indent + "    ") for m in self._modules.values()]
            text += " {\n" + "\n".join(lines) + f"\n{indent}}}"

        return text

    def _collect(self, kind: str, family: Optional[Union[str, Tuple, list]]) -> Dict:
        """Gather registered attributes of one kind, optionally restricted to some families, nested by sub-module"""
        if family is not None and not isinstance(family, (tuple, list)):
            family = (family,)

        found = {
            name: getattr(self, name)
            for name, entry in self._attributes.items()
            if entry["kind"] == kind and (family is None or entry["family"] in family)
        }

        for name, mod in self._modules.items():
            sub = mod._collect(kind, family)
            if sub or family is None:
                found[name] = sub

        return found

    def parameters(self, family: Optional[Union[str, Tuple, list]] = None) -> Dict:
        """
        Nested dictionary of the :py:class:`.Parameter` attributes of this module and its sub-modules

        Examples:
            >>> net.parameters("taus")
            {'input_0': {'tau': 0.1}, 'hidden_0': {'tau': 0.5}, ...}
        """
        return self._collect("Parameter", family)

    def state(self, family: Optional[Union[str, Tuple, list]] = None) -> Dict:
        """Nested dictionary of the :py:class:`.State` attributes of this module and its sub-modules"""
        return self._collect("State", family)

    def simulation_parameters(
        self, family: Optional[Union[str, Tuple, list]] = None
    ) -> Dict:
        """Nested dictionary of the :py:class:`.SimulationParameter` attributes of this module and its sub-modules"""
        return self._collect("SimulationParameter", family)

    def modules(self) -> Dict:
        """OrderedDict: The sub-modules of this module, by name"""
        return OrderedDict(self._modules)

    def set_attributes(self, new_attributes: dict) -> "Module":
        """
        Assign registered attributes from a (nested) dictionary, such as the state returned by :py:meth:`.evolve`

        Returns:
            Module: ``self``
        """
        for name, value in new_attributes.items():
            if name in self._modules:
                self._modules[name].set_attributes(value)
            elif name in self._attributes:
                setattr(self, name, value)

        return self

    def _reset_attribute(self, name: str) -> "Module":
        entry = self._attributes[name]
        setattr(self, name, entry["init_func"](entry["shape"]))
        return self

    def reset_state(self) -> "Module":
        """
        Re-initialise every :py:class:`.State` of this module and its sub-modules

        Returns:
            Module: ``self``
        """
        for name, entry in self._attributes.items():
            if entry["kind"] == "State":
                self._reset_attribute(name)

        for mod in self._modules.values():
            mod.reset_state()

        return self

    @property
    def name(self) -> str:
        """str: The quoted name of this module, or an empty string if unnamed"""
        return f"'{self._name}'" if self._name else ""

    @property
    def shape(self) -> tuple:
        """tuple: The shape of this module"""
        return self._shape

    @property
    def size_in(self) -> int:
        """int: The input size of this module"""
        return self._shape[0]

    @property
    def size_out(self) -> int:
        """int: The output size of this module"""
        return self._shape[-1]

    @abstractmethod
    def evolve(self, input_data, record: bool = False) -> Tuple[Any, Any, Any]:
        """
        Evolve this module over a time series of inputs

        Returns:
            tuple: (output, new_state, record)
        """

    def __call__(self, input_data, *args, **kwargs):
        return self.evolve(input_data, *args, **kwargs)

    def _auto_batch(self, data: np.ndarray) -> np.ndarray:
        """
        Check input data and bring it to shape ``(batches, T, size_in)``

        ``(T, size_in)`` gains a batch dimension; ``(T,)`` and ``(T, 1)`` are broadcast over all inputs.
        """
        data = np.array(data, "float")

        if data.ndim == 1:
            data = data[np.newaxis, :, np.newaxis]
        elif data.ndim == 2:
            data = data[np.newaxis]

        if data.shape[-1] == 1:
            data = np.broadcast_to(data, (data.shape[0], data.shape[1], self.size_in))

        if data.shape[-1] != self.size_in:
            raise InvalidInputError(
                f"Input has wrong neuron dimension. It is {data.shape[-1]}, must be {self.size_in}"
            )

        if not np.all(np.isfinite(data)):
            raise InvalidInputError("Input data must contain only finite values.")

        return data
