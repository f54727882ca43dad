"""Headless simulation entry point."""

import asyncio
import logging
import sys

from block_city.config import settings
from block_city.persistence.store import JsonFileStore
from block_city.runner import SimulationRunner
from block_city.simulation.engine import CitySimulation


def setup_logging() -> None:
    """Configure logging for the simulation."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def build_simulation() -> CitySimulation:
    """Create a simulation from settings, resuming the saved game if any."""
    simulation = CitySimulation(
        store=JsonFileStore(settings.save_path),
        save_key=settings.save_key,
        seed=settings.seed,
    )
    simulation.load()
    simulation.set_paused(settings.start_paused)
    if simulation.state.autonomy_enabled != settings.autonomy_enabled:
        simulation.set_autonomy(settings.autonomy_enabled)
    return simulation


async def main() -> None:
    """Run the simulation process."""
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Block City simulation starting...")

    runner = SimulationRunner(build_simulation())
    await runner.run()


def run() -> None:
    """Entry point for the simulation."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
