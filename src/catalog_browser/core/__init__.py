"""Core data model and deferred cross-page selection logic."""
