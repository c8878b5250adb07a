"""
Base package for all ``ctrnn`` modules.

Contains :py:class:`.Module` subclasses.
"""

# - Base Module classes
from .module import *

# - Native classes
from .native import *
