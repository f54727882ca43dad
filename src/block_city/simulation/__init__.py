"""Simulation state, player actions and the monthly tick.

`CitySimulation` lives in `block_city.simulation.engine`; it is not
re-exported here because the planner and persistence packages import this
package's submodules.
"""

from block_city.simulation.types import ActionResult, SimulationState, StatsHistory, TickReport

__all__ = [
    "ActionResult",
    "SimulationState",
    "StatsHistory",
    "TickReport",
]
