"""Typed models, constants and event names of mixnet smart-contract data."""

__all__ = ["contract", "cosmwasm", "delegations", "intervals", "nodes", "rewards"]