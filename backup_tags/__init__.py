"""Tag association service for save backups."""
