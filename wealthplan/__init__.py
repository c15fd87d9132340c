"""Household net-worth planning: 15-year projection and reality rebasing."""

__version__ = "0.1.0"
