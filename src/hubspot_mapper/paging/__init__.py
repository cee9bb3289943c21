"""Cursor paging over list endpoints."""
