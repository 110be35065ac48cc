"""Domain layer: contest model, identity, windows and merging."""
