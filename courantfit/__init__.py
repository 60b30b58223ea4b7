"""Piecewise-linear Courant-element approximation of functions on a rectangle."""

__version__ = "0.1.0"

__all__ = ["common", "functions", "matrix", "solver", "cli"]