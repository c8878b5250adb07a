"""
Exception classes raised by ``ctrnn``
"""

__all__ = [
    "CTRNNError",
    "ConfigurationMissingError",
    "InvalidInputError",
    "InvalidParameterError",
]


### --- CTRNNError exception class
class CTRNNError(Exception):
    """
    Define an exception class to encapsulate network errors
    """

    pass


class ConfigurationMissingError(CTRNNError):
    """A network was initialised before a configuration was set"""

    pass


class InvalidInputError(CTRNNError, ValueError):
    """An input vector has a missing or non-numeric entry for a required input node"""

    pass


class InvalidParameterError(CTRNNError, ValueError):
    """A configuration or simulation value would produce an invalid dynamical system"""

    pass
