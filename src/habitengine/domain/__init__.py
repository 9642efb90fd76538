"""Domain layer: protocols the engine depends on."""
