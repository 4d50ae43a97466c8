"""nsregistry - namespace membership and maintainership for a package registry."""

__version__ = "0.1.0"
