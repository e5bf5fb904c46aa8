"""Websocket client, messages and tags for a Nym native client."""

__all__ = ["client", "messages", "tags"]