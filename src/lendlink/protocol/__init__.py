"""Lending protocol deployments."""
