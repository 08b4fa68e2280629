"""Application services orchestrating domain logic and infrastructure."""
