"""Infrastructure layer: configuration, database handle, logging."""
