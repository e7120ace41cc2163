"""Domain layer: the Session aggregate, its value objects, errors, and ports."""
