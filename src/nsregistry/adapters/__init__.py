"""Adapters implementing the core protocols."""
