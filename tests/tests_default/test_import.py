"""
Test library integrity
"""


def test_import():
    """
    Test the import of top level package
    """
    import ctrnn


def test_submodule_import():
    """
    Test the import of submodules
    """
    import ctrnn.nn.modules
    import ctrnn.parameters
    import ctrnn.mapping
    import ctrnn.configuration
    import ctrnn.analysis
    import ctrnn.errors


def test_base_attributes():
    import ctrnn

    print("ctrnn version", ctrnn.__version__)
    assert isinstance(ctrnn.__version__, str)


def test_top_level_names():
    from ctrnn import (
        CTRNN,
        LeakyIntegratorNode,
        CTRNNConfiguration,
        NodeGenome,
        ParameterMapper,
        ConfigurationMissingError,
        InvalidInputError,
        InvalidParameterError,
    )
