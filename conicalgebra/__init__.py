"""Sparse and dense linear algebra building blocks for conic optimization solvers."""

__version__ = "0.1.0"