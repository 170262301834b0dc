"""Infrastructure Layer — logging setup and on-disk persistence."""
