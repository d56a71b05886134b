"""Core utilities shared across mediaproc modules."""
