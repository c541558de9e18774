"""Infrastructure services - provider clients, storage and parsing."""
