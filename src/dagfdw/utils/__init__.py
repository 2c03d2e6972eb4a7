"""Small helpers shared by dagfdw tooling."""
