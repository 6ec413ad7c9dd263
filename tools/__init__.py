"""Repository, persistence and collaborator adapters."""
