"""Ranked survey core - storage, survey store and aggregation."""
