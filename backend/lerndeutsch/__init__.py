"""LernDeutsch vocabulary extraction backend."""
