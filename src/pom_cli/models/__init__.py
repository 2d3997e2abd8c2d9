"""pom domain models."""
