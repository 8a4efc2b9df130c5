"""Group border rendering and boundary graph extraction over a seed scatter."""

__version__ = "0.1.0"
