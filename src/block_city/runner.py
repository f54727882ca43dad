"""Simulation runner - drives the tick and planner cadences on timers."""

import asyncio
import contextlib
import logging
import signal

from block_city.config import Settings, settings
from block_city.simulation.engine import CitySimulation

logger = logging.getLogger(__name__)


class SimulationRunner:
    """Runs a CitySimulation until shutdown.

    Two loops share one event loop: a monthly tick and the planner cadence.
    Both call synchronous entry points, so they never overlap.
    """

    def __init__(self, simulation: CitySimulation, config: Settings | None = None) -> None:
        self.simulation = simulation
        self.config = config or settings
        self._shutdown = False
        self._stop_event = asyncio.Event()
        self._months_run = 0

    async def run(self) -> None:
        """Main run loop - tick and plan until shutdown, then save."""
        logger.info(
            "Simulation runner starting (tick %.2fs, planner %.2fs)",
            self.config.tick_interval_seconds,
            self.config.planner_interval_seconds,
        )
        self._setup_signal_handlers()

        await asyncio.gather(self._tick_loop(), self._planner_loop())

        logger.info("Simulation runner shutting down, saving game...")
        self._autosave()
        logger.info("Simulation runner stopped at month %d", self.simulation.state.stats.month)

    def stop(self) -> None:
        self._shutdown = True
        self._stop_event.set()

    def _setup_signal_handlers(self) -> None:
        """Set up graceful shutdown on SIGINT/SIGTERM."""
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self._handle_shutdown)
            except (NotImplementedError, RuntimeError):
                # Not available off the main thread or on Windows event loops
                logger.debug("Signal handler for %s not installed", sig.name)

    def _handle_shutdown(self) -> None:
        """Handle shutdown signal."""
        logger.info("Shutdown signal received")
        self.stop()

    async def _sleep(self, seconds: float) -> None:
        """Sleep, waking early on shutdown."""
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(self._stop_event.wait(), timeout=seconds)

    async def _tick_loop(self) -> None:
        while not self._shutdown:
            await self._sleep(self.config.tick_interval_seconds)
            if self._shutdown:
                break
            try:
                self.tick_once()
            except Exception:
                logger.exception("Error in simulation tick loop")

    async def _planner_loop(self) -> None:
        while not self._shutdown:
            await self._sleep(self.config.planner_interval_seconds)
            if self._shutdown:
                break
            try:
                self.plan_once()
            except Exception:
                logger.exception("Error in planner loop")

    def tick_once(self) -> None:
        """Advance one month, flush events to the log and autosave when due."""
        report = self.simulation.advance_tick()
        self._flush_events()
        if report is None:
            return

        self._months_run += 1
        every = self.config.autosave_every_months
        if every > 0 and self._months_run % every == 0:
            self._autosave()

        limit = self.config.max_months
        if limit is not None and self._months_run >= limit:
            logger.info("Reached %d simulated months", limit)
            self.stop()

    def plan_once(self) -> None:
        self.simulation.advance_planner()
        self._flush_events()

    def _flush_events(self) -> None:
        for event in self.simulation.drain_events():
            logger.info("[%s] %s", event.kind, event.message)

    def _autosave(self) -> None:
        try:
            self.simulation.save()
        except OSError:
            logger.exception("Autosave failed")
        else:
            self._flush_events()
