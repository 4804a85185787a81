"""Domain layer: batch jobs over fleet documents."""
