"""Domain services: one per aggregate, each owning its unit of work."""
