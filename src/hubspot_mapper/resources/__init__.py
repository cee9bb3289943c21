"""Resource APIs: thin call sites around the mapping engine."""
