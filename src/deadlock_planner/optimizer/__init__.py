"""Build optimization interfaces."""

from deadlock_planner.optimizer.planner import OptimizeResult, optimize_build, optimize_from_spec
from deadlock_planner.optimizer.specs import OptimizeSpec

__all__ = [
    "OptimizeResult",
    "OptimizeSpec",
    "optimize_build",
    "optimize_from_spec",
]
