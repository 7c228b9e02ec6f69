"""Expressions, times, constraints and bindings for a timeline-typed hardware language, and generator tool descriptions."""

__version__ = "0.1.0"