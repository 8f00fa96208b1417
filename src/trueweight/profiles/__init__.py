"""Body composition and standard-formula energy calculations."""
