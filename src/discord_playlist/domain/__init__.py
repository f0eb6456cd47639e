"""Domain layer: playlist entities, value objects and shared primitives."""
