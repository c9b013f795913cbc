from motion_core.integrations.time.abc import Time
from motion_core.integrations.time.real import RealTime

__all__ = [
    "RealTime",
    "Time",
]
