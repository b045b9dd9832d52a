"""Interactive first-order logic proof assistant over the natural numbers."""

__version__ = "0.1.0"