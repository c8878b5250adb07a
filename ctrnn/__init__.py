"""
A simulator for continuous-time recurrent neural networks of leaky-integrator neurons
"""

from .version import *
from .errors import *
from .mapping import *
from .configuration import *

from .nn.modules import CTRNN, LeakyIntegratorNode
