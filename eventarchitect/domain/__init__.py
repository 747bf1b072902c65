"""Domain layer: entities, invariant-preserving edits, store and workflows."""
