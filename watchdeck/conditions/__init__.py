"""Action condition popup: catalog, validation and data assembly."""
