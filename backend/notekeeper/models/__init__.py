"""In-memory value objects shared by the stores and the API layer."""
