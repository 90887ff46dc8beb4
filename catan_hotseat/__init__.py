"""Hotseat Catan for 2 to 4 players sharing one screen."""

__version__ = "0.1.0"
