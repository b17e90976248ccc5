"""config/ — settings loading and validation."""
