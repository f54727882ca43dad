"""Fire outbreak, spread and suppression."""

from block_city.fire.simulator import FireSimulator
from block_city.fire.types import FireConfig, FireTickResult

__all__ = [
    "FireConfig",
    "FireSimulator",
    "FireTickResult",
]
