"""Domain documents."""
