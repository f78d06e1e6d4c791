"""Artifact storage, retention and public serving."""
