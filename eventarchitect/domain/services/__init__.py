"""Domain services: invariant-preserving edits, project store, dossier."""
