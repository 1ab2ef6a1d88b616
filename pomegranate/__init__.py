"""Pomegranate - container execution engine for the PaaS control plane."""

__version__ = "0.1.0"
