"""Persistence backend for the Open FPS editor: project documents, recent projects and RGBA image I/O."""

__version__ = "1.0.0"
