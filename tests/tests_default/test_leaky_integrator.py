import pytest


def test_imports():
    from ctrnn.nn.modules import LeakyIntegratorNode


def test_instantiation():
    from ctrnn.nn.modules import LeakyIntegratorNode
    import numpy as np

    node = LeakyIntegratorNode()
    assert node.shape == (1, 1)
    assert node.num_inputs == 1
    assert np.all(node.weights == 0.0)
    assert node.output == 0.0
    print(node)

    node = LeakyIntegratorNode(3, weights=[1.0, 2.0, 3.0], gain=2.0, tau=0.5)
    assert node.shape == (3, 1)
    assert np.allclose(node.weights, [1.0, 2.0, 3.0])

    # - Parameter families
    assert set(node.parameters().keys()) == {
        "weights",
        "gain",
        "bias",
        "tau",
        "sine_coefficient",
        "frequency_multiplier",
    }
    assert list(node.parameters("taus").keys()) == ["tau"]
    assert set(node.state().keys()) == {"inputs", "output", "temp_output"}
    assert set(node.simulation_parameters().keys()) == {"dt", "transfer_func"}


def test_invalid_parameters():
    from ctrnn.nn.modules import LeakyIntegratorNode
    from ctrnn.errors import InvalidParameterError

    with pytest.raises(InvalidParameterError):
        LeakyIntegratorNode(1, tau=0.0)

    with pytest.raises(InvalidParameterError):
        LeakyIntegratorNode(1, tau=-1.0)

    with pytest.raises(InvalidParameterError):
        LeakyIntegratorNode(1, tau=float("nan"))

    with pytest.raises(InvalidParameterError):
        LeakyIntegratorNode(2, weights=[1.0, 2.0, 3.0])

    with pytest.raises(InvalidParameterError):
        LeakyIntegratorNode(1, dt=0.0)

    with pytest.raises(InvalidParameterError):
        LeakyIntegratorNode(0)

    # - A time constant modified after construction is checked on update
    node = LeakyIntegratorNode(1)
    node.tau = 0.0
    with pytest.raises(InvalidParameterError):
        node.compute_candidate_output()


def test_set_input():
    from ctrnn.nn.modules import LeakyIntegratorNode
    import numpy as np

    node = LeakyIntegratorNode(2)
    node.set_input(1, 0.5)
    assert np.allclose(node.inputs, [0.0, 0.5])

    with pytest.raises(IndexError):
        node.set_input(2, 1.0)

    with pytest.raises(IndexError):
        node.set_input(-1, 1.0)


def test_candidate_and_commit():
    from ctrnn.nn.modules import LeakyIntegratorNode
    import math

    node = LeakyIntegratorNode(
        2,
        weights=[0.5, -1.0],
        gain=2.0,
        bias=0.2,
        tau=0.5,
        sine_coefficient=0.3,
        frequency_multiplier=2.0,
        dt=0.1,
    )
    node.set_input(0, 1.0)
    node.set_input(1, 0.4)

    x = 0.5 - 0.4 + 0.2
    target = math.tanh(2.0 * x) + 0.3 * math.sin(2.0 * x)
    expected = 0.0 + (0.1 / 0.5) * (target - 0.0)

    # - Candidate does not modify the committed output
    candidate = node.compute_candidate_output()
    assert candidate == pytest.approx(expected, abs=1e-12)
    assert node.temp_output == pytest.approx(expected, abs=1e-12)
    assert node.get_output() == 0.0

    # - Computing the candidate twice gives the same value
    assert node.compute_candidate_output() == pytest.approx(expected, abs=1e-12)

    node.commit()
    assert node.get_output() == pytest.approx(expected, abs=1e-12)

    # - The next step integrates from the committed output
    expected_2 = expected + (0.1 / 0.5) * (target - expected)
    node.compute_candidate_output()
    node.commit()
    assert node.get_output() == pytest.approx(expected_2, abs=1e-12)


def test_reset_state():
    from ctrnn.nn.modules import LeakyIntegratorNode
    import numpy as np

    node = LeakyIntegratorNode(2, weights=[1.0, 1.0], bias=0.5, tau=0.1, dt=0.1)
    node.set_input(0, 1.0)
    node.compute_candidate_output()
    node.commit()
    assert node.get_output() != 0.0

    node.reset_state()
    assert node.output == 0.0
    assert node.temp_output == 0.0

    # - Weights, parameters and inputs are untouched
    assert np.allclose(node.weights, [1.0, 1.0])
    assert node.bias == 0.5
    assert np.allclose(node.inputs, [1.0, 0.0])


def test_set_timestep():
    from ctrnn.nn.modules import LeakyIntegratorNode
    from ctrnn.errors import InvalidParameterError

    node = LeakyIntegratorNode(1, weights=[1.0], tau=1.0, dt=0.1)
    node.set_input(0, 1.0)
    node.compute_candidate_output()
    node.commit()
    output = node.get_output()

    node.set_timestep(0.05)
    assert node.dt == 0.05
    assert node.get_output() == output
    assert node.step_ratio == pytest.approx(0.05)

    with pytest.raises(InvalidParameterError):
        node.set_timestep(0.0)


def test_halving_timestep_halves_first_step():
    from ctrnn.nn.modules import LeakyIntegratorNode

    def first_step(dt):
        node = LeakyIntegratorNode(1, weights=[1.0], tau=1.0, dt=dt)
        node.set_input(0, 1.0)
        node.compute_candidate_output()
        node.commit()
        return node.get_output()

    assert first_step(0.05) == pytest.approx(first_step(0.1) / 2, rel=1e-12)


def test_transfer_functions():
    from ctrnn.nn.modules import LeakyIntegratorNode
    import math

    node = LeakyIntegratorNode(
        1, weights=[1.0], tau=0.1, dt=0.1, transfer_func="sigmoid"
    )
    node.compute_candidate_output()
    node.commit()
    assert node.get_output() == pytest.approx(0.5)

    node = LeakyIntegratorNode(
        1, weights=[1.0], tau=0.1, dt=0.1, transfer_func=lambda x, g, s, f: 2 * x
    )
    node.set_input(0, 3.0)
    node.compute_candidate_output()
    node.commit()
    assert node.get_output() == pytest.approx(6.0)


def test_evolve():
    from ctrnn.nn.modules import LeakyIntegratorNode
    import numpy as np

    T = 50
    node = LeakyIntegratorNode(2, weights=[1.0, -1.0], tau=0.5, dt=0.1)

    data = np.random.rand(T, 2)
    out, state, rec = node(data, record=True)
    assert out.shape == (1, T, 1)
    assert rec["weighted_input"].shape == (1, T, 1)
    assert np.allclose(rec["weighted_input"][0, :, 0], data[:, 0] - data[:, 1])
    assert state["output"] == out[0, -1, 0]

    # - Batches all start from the same state
    node.reset_state()
    batched = np.stack([data, data, np.zeros((T, 2))])
    out, _, _ = node(batched)
    assert out.shape == (3, T, 1)
    assert np.allclose(out[0], out[1])
    assert np.allclose(out[2], 0.0)
    assert node.output == out[0, -1, 0]


def test_evolve_returns_independent_state():
    from ctrnn.nn.modules import LeakyIntegratorNode
    import numpy as np

    T = 20
    node = LeakyIntegratorNode(2, weights=[1.0, 0.5], tau=0.5, dt=0.1)

    data = np.random.rand(T, 2)
    out, state, _ = node(data)

    # - Later stepping does not alter the returned state
    node.set_input(0, 5.0)
    node.compute_candidate_output()
    node.commit()
    assert np.allclose(state["inputs"], data[-1])
    assert state["output"] == out[0, -1, 0]

    # - The returned state restores the node
    node.set_attributes(state)
    assert np.allclose(node.inputs, data[-1])
    assert node.get_output() == out[0, -1, 0]


def test_two_input_step():
    from ctrnn.nn.modules import LeakyIntegratorNode
    import numpy as np

    node = LeakyIntegratorNode(2, weights=[1.0, -0.5], tau=0.5, dt=0.1)
    assert repr(node) == "LeakyIntegratorNode  with shape (2, 1)"

    node.set_input(0, 1.0)
    assert node.compute_candidate_output() == pytest.approx(0.2 * np.tanh(1.0))
    assert node.get_output() == 0.0

    node.commit()
    assert node.get_output() == pytest.approx(0.15231883)
