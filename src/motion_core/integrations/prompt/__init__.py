from motion_core.integrations.prompt.abc import Prompter
from motion_core.integrations.prompt.real import RealPrompter

__all__ = [
    "Prompter",
    "RealPrompter",
]
