"""Generation pipeline and its run event log."""

from . import log
from .orchestrator import derive_seed, main, run_pipeline

__all__ = ["derive_seed", "log", "main", "run_pipeline"]
