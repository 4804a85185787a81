"""Infrastructure layer: reusable services shared across batch jobs."""
