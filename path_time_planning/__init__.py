"""Path-time neighborhood of moving obstacles for lattice motion planning."""

__version__ = "0.1.0"
