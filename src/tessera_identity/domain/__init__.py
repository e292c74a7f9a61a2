"""Identity domain layer."""
