"""Batch image cropping with an interactive crop selector."""

__version__ = "0.3.0"
