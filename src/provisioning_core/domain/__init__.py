"""Domain layer: inventory model, template resolution and provider operations."""
