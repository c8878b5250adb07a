"""
Genome containers describing a CTRNN configuration

A configuration is usually produced by an external genome encoder, as a JSON-style dictionary:

.. code-block:: python

    {
        "iNs": 2,
        "hNs": 1,
        "inputNodes": [
            {"w": [0.5], "gain": 0.5, "bias": 0.5, "t": 0.5, "sineCoefficient": 0.0, "frequencyMultiplier": 0.0},
            ...
        ],
        "hiddenNodes": [
            {"w": [0.5, 0.5, 0.5], "gain": 0.5, ...},
        ],
    }

All genome values are normalised, and are mapped to network parameters by a :py:class:`.ParameterMapper` when the network is initialised.
"""

import json
from dataclasses import dataclass, field
from collections.abc import Mapping

from typing import List, Any, Tuple

from ctrnn.errors import InvalidParameterError
from ctrnn.typehints import Genome

__all__ = ["NodeGenome", "CTRNNConfiguration"]

# - Dictionary keys used by genome producers, mapped to attribute names
_NODE_KEYS = {
    "w": "w",
    "gain": "gain",
    "bias": "bias",
    "t": "t",
    "sineCoefficient": "sine_coefficient",
    "frequencyMultiplier": "frequency_multiplier",
}


def _get(record: Genome, key: str, attr: str) -> Any:
    """Read a field from a mapping by key, or from an object by key or attribute name"""
    if isinstance(record, Mapping):
        if key in record:
            return record[key]
        if attr in record:
            return record[attr]
    else:
        if hasattr(record, key):
            return getattr(record, key)
        if hasattr(record, attr):
            return getattr(record, attr)

    raise InvalidParameterError(f'Genome record has no field "{key}".')


@dataclass
class NodeGenome:
    """
    The normalised genome of a single node
    """

    w: Tuple[float, ...]
    """ Tuple[float]: Normalised weights, one per node input """

    gain: float = 0.0
    """ float: Normalised gain """

    bias: float = 0.5
    """ float: Normalised bias """

    t: float = 0.5
    """ float: Normalised time constant """

    sine_coefficient: float = 0.0
    """ float: Normalised amplitude of the sine term """

    frequency_multiplier: float = 0.0
    """ float: Normalised frequency of the sine term """

    def __post_init__(self):
        if isinstance(self.w, (int, float)):
            self.w = (self.w,)
        self.w = tuple(float(v) for v in self.w)

    @classmethod
    def from_dict(cls, record: Genome) -> "NodeGenome":
        """
        Build a node genome from a mapping or an attribute object

        Both the genome producer keys (``"sineCoefficient"``) and the attribute names (``"sine_coefficient"``) are accepted.
        """
        if isinstance(record, NodeGenome):
            return record

        return cls(**{attr: _get(record, key, attr) for key, attr in _NODE_KEYS.items()})

    def to_dict(self) -> dict:
        """dict: This genome, using the genome producer keys"""
        record = {key: getattr(self, attr) for key, attr in _NODE_KEYS.items()}
        record["w"] = list(self.w)
        return record


@dataclass
class CTRNNConfiguration:
    """
    The normalised genome of a complete network

    Every hidden node is also an output node. Each hidden node genome carries one weight per input node and one per hidden node, including itself.
    """

    iNs: int
    """ int: Number of input nodes """

    hNs: int
    """ int: Number of hidden (and output) nodes """

    inputNodes: List[NodeGenome] = field(default_factory=list)
    """ List[NodeGenome]: Genomes of the input nodes, in order """

    hiddenNodes: List[NodeGenome] = field(default_factory=list)
    """ List[NodeGenome]: Genomes of the hidden nodes, in order """

    def __post_init__(self):
        self.iNs = int(self.iNs)
        self.hNs = int(self.hNs)
        self.inputNodes = [NodeGenome.from_dict(n) for n in self.inputNodes]
        self.hiddenNodes = [NodeGenome.from_dict(n) for n in self.hiddenNodes]

    @classmethod
    def from_dict(cls, config: Genome) -> "CTRNNConfiguration":
        """
        Build a configuration from a JSON-style mapping or from an object with the same attributes

        Args:
            config: A ``CTRNNConfiguration``, a mapping, or an object providing ``iNs``, ``hNs``, ``inputNodes`` and ``hiddenNodes``

        Returns:
            CTRNNConfiguration: The configuration
        """
        if isinstance(config, CTRNNConfiguration):
            return config

        return cls(
            iNs=_get(config, "iNs", "num_input_nodes"),
            hNs=_get(config, "hNs", "num_hidden_nodes"),
            inputNodes=list(_get(config, "inputNodes", "input_nodes")),
            hiddenNodes=list(_get(config, "hiddenNodes", "hidden_nodes")),
        )

    def to_dict(self) -> dict:
        """dict: This configuration as a JSON-style dictionary"""
        return {
            "iNs": self.iNs,
            "hNs": self.hNs,
            "inputNodes": [n.to_dict() for n in self.inputNodes],
            "hiddenNodes": [n.to_dict() for n in self.hiddenNodes],
        }

    def to_json(self) -> str:
        """str: This configuration encoded as JSON"""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, json_str: str) -> "CTRNNConfiguration":
        """Decode a configuration from a JSON string"""
        return cls.from_dict(json.loads(json_str))

    def save(self, filename: str):
        """
        Save this configuration to a JSON file

        Args:
            filename (str): The path to a file in which to save the configuration
        """
        with open(filename, "w") as f:
            json.dump(self.to_dict(), f)

    @staticmethod
    def load(filename: str) -> "CTRNNConfiguration":
        """
        Load a configuration from a JSON file

        Args:
            filename (str): The path of a JSON file containing a saved configuration

        Returns:
            CTRNNConfiguration: The loaded configuration
        """
        with open(filename, "r") as f:
            loaddict: dict = json.load(f)

        return CTRNNConfiguration.from_dict(loaddict)
