"""SMIRE: merchant payments analytics tools for agent runtimes."""

__version__ = "0.1.0"
