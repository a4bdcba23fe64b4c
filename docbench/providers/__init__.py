"""Concrete adapters for the interfaces in :mod:`docbench.interfaces`."""
