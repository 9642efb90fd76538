"""Infrastructure adapters: database helpers and concrete status stores."""
