"""API adapters."""
