"""Core quantity and unit types."""
