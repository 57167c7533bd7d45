"""
keyopt: minibatch stochastic optimization with adaptive gain schedules.

The public API re-exports the domain contracts (`keyopt.domain`) and their
implementations (`keyopt.infrastructure`).
"""

from .domain import *  # noqa: F401,F403
from .infrastructure import *  # noqa: F401,F403

__version__ = "0.1.0"
