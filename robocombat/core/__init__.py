"""Core engine: data types, dice expressions and the event bus."""
