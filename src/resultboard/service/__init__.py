"""Service layer for resultboard."""
