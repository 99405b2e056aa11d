"""BioMed Research Suite: reference tables and illustrative simulators behind a FastAPI service."""

__version__ = "3.0.0"
