"""Identity infrastructure."""
