"""Infrastructure adapters (database, hosted backend)."""
