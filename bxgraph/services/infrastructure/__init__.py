"""Infrastructure services: configuration, database administration, CLI wiring."""
