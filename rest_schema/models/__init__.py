"""Field and Schema models, and their structural descriptions."""
