"""droponoff command-line interface."""
