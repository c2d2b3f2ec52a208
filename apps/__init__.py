"""Domain apps of the SpaOps project."""
