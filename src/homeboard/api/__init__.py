"""REST API for homeboard."""
