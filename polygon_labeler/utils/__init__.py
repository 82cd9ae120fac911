"""Shared helpers: label generation, clock, coordinate text rendering."""
