"""Workbench services: document store and ingestion, the model gateway,
structured notes and the local analyses (word frequency, graph layout)."""
