"""REST API for resultboard."""
