"""HTTP transport and rate limiting."""
