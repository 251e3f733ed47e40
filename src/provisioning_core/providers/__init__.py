"""Provider bindings."""
