"""Entity schema, value coercion and property bag conversion."""
