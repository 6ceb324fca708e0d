"""
Zero-Hydro Digital Twin

This package simulates the physical state of a water body (temperature,
turbidity, dissolved oxygen, waves) hour by hour from weather data and
derives per-species fish activity scores.
"""

__version__ = "0.1.0"
__description__ = "Water body digital twin and fish activity scoring"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "ZeroHydroApp":
        from .main import ZeroHydroApp
        return ZeroHydroApp
    if name in ("Simulator", "simulate"):
        from . import simulator
        return getattr(simulator, name)
    if name == "decide_sync_action":
        from .services.sync_policy import decide_sync_action
        return decide_sync_action
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ZeroHydroApp",
    "Simulator",
    "simulate",
    "decide_sync_action",
]
