"""Client timeline service package."""
