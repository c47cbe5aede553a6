"""HTTP transport for the tag commands."""
