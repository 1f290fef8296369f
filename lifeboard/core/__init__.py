"""Simulation core: grid type, transition engine and drivers."""

from .grid import Grid, grids_equal
from .conway import ConwayEngine, default_engine
from .simulation import FixedPoint, SimulationDriver

__all__ = [
    'Grid',
    'grids_equal',
    'ConwayEngine',
    'default_engine',
    'FixedPoint',
    'SimulationDriver',
]
