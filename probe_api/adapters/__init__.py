"""Adapters — entry points for deployment shapes other than the HTTP server."""
