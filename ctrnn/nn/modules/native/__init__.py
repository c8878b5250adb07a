"""Modules using numpy as a backend"""

from .leaky_integrator import *
from .ctrnn import *
