"""Geometry buffers, colors, and legend sinks for the overlay renderer."""
