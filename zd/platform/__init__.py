"""Platform layer: the only place that talks to the operating system."""

from .process import ProcessError, run

__all__ = ["ProcessError", "run"]
