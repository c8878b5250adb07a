"""
Steady-state analysis of CTRNN dynamics
"""

import numpy as np
from scipy.optimize import root
from warnings import warn

from typing import Sequence, Tuple, Optional

from ctrnn.nn.modules.native.ctrnn import CTRNN
from ctrnn.errors import ConfigurationMissingError, InvalidInputError

__all__ = ["fixed_point", "node_targets"]


def node_targets(net: CTRNN, inputs: Sequence[float], outputs: np.ndarray) -> np.ndarray:
    """
    Compute the target activation of every node, for given external inputs and node outputs

    Args:
        net (CTRNN): An initialised network
        inputs (Sequence[float]): External input, one value per input node
        outputs (np.ndarray): Outputs ``(num_nodes,)`` of all nodes; input nodes first, then hidden nodes

    Returns:
        np.ndarray: The transfer function of each node ``(num_nodes,)``, evaluated on its weighted input
    """
    nodes = net.input_nodes + net.hidden_nodes
    external = np.array(inputs[: net.num_input_nodes], "float")

    targets = []
    for i, node in enumerate(nodes):
        node_input = external[i : i + 1] if i < net.num_input_nodes else outputs
        x = float(np.dot(node_input, node.weights) + node.bias)
        targets.append(
            node.transfer_func(
                x, node.gain, node.sine_coefficient, node.frequency_multiplier
            )
        )

    return np.array(targets, "float")


def fixed_point(
    net: CTRNN,
    inputs: Sequence[float],
    initial_guess: Optional[np.ndarray] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Find a fixed point of the network dynamics under constant external input

    At a fixed point every node output equals its target activation, so the Euler update leaves the network unchanged regardless of ``dt`` and the time constants. Networks with strong recurrence may have several fixed points; the one found is the one reached by the root finder from ``initial_guess``.

    Args:
        net (CTRNN): An initialised network
        inputs (Sequence[float]): Constant external input, one value per input node
        initial_guess (Optional[np.ndarray]): Starting point ``(num_nodes,)`` for the root finder. Default: the current committed outputs of the network

    Returns:
        (np.ndarray, np.ndarray): input_outputs ``(num_input_nodes,)``, hidden_outputs ``(num_hidden_nodes,)``
    """
    if not net.hidden_nodes:
        raise ConfigurationMissingError("CTRNN must be initialised before analysis.")

    if len(inputs) < net.num_input_nodes:
        raise InvalidInputError(
            f"Too few inputs for CTRNN configuration. Expected {net.num_input_nodes}, got {len(inputs)}."
        )

    if initial_guess is None:
        initial_guess = np.array(
            [node.output for node in net.input_nodes + net.hidden_nodes], "float"
        )

    result = root(
        lambda y: y - node_targets(net, inputs, y),
        np.array(initial_guess, "float"),
        method="hybr",
    )

    if not result.success:
        warn(f"Fixed point search did not converge: {result.message}")

    return result.x[: net.num_input_nodes], result.x[net.num_input_nodes :]
