"""Software rendering and camera controllers for 2D physics scene snapshots."""

__version__ = "0.1.0"