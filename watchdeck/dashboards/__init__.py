"""Dashboard CRUD service: sharing grants and widget grids."""
