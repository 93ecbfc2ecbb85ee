"""Stateless helpers shared by the inventory adapters."""
