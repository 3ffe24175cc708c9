"""Roadmapper - turn a goal into a connected, trackable learning roadmap."""

__version__ = "0.1.0"
