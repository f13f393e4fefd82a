"""Domain layer: store collaborator contracts."""
