"""Operational routes."""
