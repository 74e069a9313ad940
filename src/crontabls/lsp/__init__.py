"""Language Server Protocol transport."""
