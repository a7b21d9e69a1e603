"""Game rules: character model, catalogs, systems and the intent engine."""
