"""City-wide metrics derivation."""

from block_city.metrics.engine import apply_metrics, derive_metrics
from block_city.metrics.types import CityMetrics, Contributions

__all__ = [
    "CityMetrics",
    "Contributions",
    "apply_metrics",
    "derive_metrics",
]
