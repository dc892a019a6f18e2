"""Core collection pipeline: version selection, resolution, aggregation and assembly."""
