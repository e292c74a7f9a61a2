"""Identity presentation layer."""
