"""Utility functions."""

from .diagnostics import DiagnosticSink

__all__ = ["DiagnosticSink"]
