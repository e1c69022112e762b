"""LendLink - shareable links for unsigned Aave V3 transactions."""

__version__ = "0.1.0"
