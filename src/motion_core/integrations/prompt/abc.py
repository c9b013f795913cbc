"""Interactive confirmation abstraction."""

from abc import ABC, abstractmethod


class Prompter(ABC):
    """Abstract yes/no prompting for dependency injection."""

    @abstractmethod
    def is_interactive(self) -> bool:
        """Whether a human can answer prompts (stdin is a TTY)."""
        ...

    @abstractmethod
    def confirm(self, message: str, *, default: bool) -> bool:
        """Ask a yes/no question.

        Args:
            message: Question to display
            default: Answer used when the user just presses enter

        Returns:
            True if the user answered yes
        """
        ...
