"""Read-only assignee directory."""
