"""Client toolkit for the Nym mixnet: node API, websocket client, contract models and helpers."""

__version__ = "0.1.0"

__all__ = ["mixnet", "nymnode", "successgroup", "uint128", "version", "wsc"]