"""Panel dashboard: page controller, reactive state, and app."""
