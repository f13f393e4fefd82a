"""Persistence infrastructure for the store collaborator."""
