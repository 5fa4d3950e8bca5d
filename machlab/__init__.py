"""Simple Machine simulator, boundary-tag heap allocator and data-structure exercises."""

__version__ = "0.1.0"