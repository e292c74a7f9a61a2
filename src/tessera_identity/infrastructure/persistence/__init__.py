"""Identity persistence implementations."""
