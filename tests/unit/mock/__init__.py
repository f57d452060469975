from .simulator import SimulationResult, simulate, unfold_tape

__all__ = ["SimulationResult", "simulate", "unfold_tape"]
