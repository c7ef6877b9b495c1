"""Plant models for simulation."""

from pid_sim.plants.base_plant import BasePlant
from pid_sim.plants.integrator import IntegratorPlant

__all__ = [
    "BasePlant",
    "IntegratorPlant",
]
