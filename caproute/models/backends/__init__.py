from .base import ProviderBackend
from .simulated_backend import SimulatedBackend, SIMULATED_MARKER

__all__ = ["ProviderBackend", "SimulatedBackend", "SIMULATED_MARKER"]
