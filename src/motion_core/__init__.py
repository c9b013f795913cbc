"""Install Motion Core components from a remote registry into a local project."""

__version__ = "0.1.0"
