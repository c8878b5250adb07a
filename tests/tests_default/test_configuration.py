import pytest


def example_dict():
    return {
        "iNs": 2,
        "hNs": 1,
        "inputNodes": [
            {
                "w": [0.6],
                "gain": 0.1,
                "bias": 0.5,
                "t": 0.2,
                "sineCoefficient": 0.0,
                "frequencyMultiplier": 0.3,
            },
            {
                "w": [0.4],
                "gain": 0.2,
                "bias": 0.5,
                "t": 0.3,
                "sineCoefficient": 0.1,
                "frequencyMultiplier": 0.4,
            },
        ],
        "hiddenNodes": [
            {
                "w": [0.9, 0.1, 0.5],
                "gain": 0.3,
                "bias": 0.4,
                "t": 0.5,
                "sineCoefficient": 0.2,
                "frequencyMultiplier": 0.5,
            },
        ],
    }


def test_from_dict():
    from ctrnn.configuration import CTRNNConfiguration, NodeGenome

    config = CTRNNConfiguration.from_dict(example_dict())
    assert config.iNs == 2
    assert config.hNs == 1
    assert len(config.inputNodes) == 2
    assert isinstance(config.hiddenNodes[0], NodeGenome)
    assert config.hiddenNodes[0].w == (0.9, 0.1, 0.5)
    assert config.inputNodes[1].sine_coefficient == 0.1
    assert config.inputNodes[1].frequency_multiplier == 0.4

    # - A configuration passes through unchanged
    assert CTRNNConfiguration.from_dict(config) is config


def test_round_trip():
    from ctrnn.configuration import CTRNNConfiguration

    config = CTRNNConfiguration.from_dict(example_dict())
    assert config.to_dict() == example_dict()
    assert CTRNNConfiguration.from_json(config.to_json()) == config


def test_attribute_objects():
    from ctrnn.configuration import CTRNNConfiguration, NodeGenome
    from types import SimpleNamespace

    genome = SimpleNamespace(
        w=[0.5, 0.5],
        gain=0.5,
        bias=0.5,
        t=0.5,
        sineCoefficient=0.0,
        frequencyMultiplier=0.0,
    )
    obj = SimpleNamespace(
        iNs=1, hNs=1, inputNodes=[NodeGenome(w=0.5)], hiddenNodes=[genome]
    )

    config = CTRNNConfiguration.from_dict(obj)
    assert config.inputNodes[0].w == (0.5,)
    assert config.hiddenNodes[0].w == (0.5, 0.5)

    # - Python attribute names are accepted as mapping keys
    config = CTRNNConfiguration.from_dict(
        {
            "num_input_nodes": 1,
            "num_hidden_nodes": 1,
            "input_nodes": [{"w": [0.5], "gain": 0.5, "bias": 0.5, "t": 0.5, "sine_coefficient": 0.1, "frequency_multiplier": 0.2}],
            "hidden_nodes": [NodeGenome(w=(0.5, 0.5))],
        }
    )
    assert config.inputNodes[0].sine_coefficient == 0.1


def test_missing_field():
    from ctrnn.configuration import CTRNNConfiguration
    from ctrnn.errors import InvalidParameterError

    config = example_dict()
    del config["hiddenNodes"][0]["t"]

    with pytest.raises(InvalidParameterError):
        CTRNNConfiguration.from_dict(config)

    with pytest.raises(InvalidParameterError):
        CTRNNConfiguration.from_dict({"iNs": 1})


def test_save_load(tmp_path):
    from ctrnn.configuration import CTRNNConfiguration

    config = CTRNNConfiguration.from_dict(example_dict())
    filename = tmp_path / "config.json"
    config.save(str(filename))

    assert CTRNNConfiguration.load(str(filename)) == config
