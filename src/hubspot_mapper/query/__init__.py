"""CRM search queries."""
