"""Client and response models for the Nym node HTTP API."""

__all__ = ["client", "models"]