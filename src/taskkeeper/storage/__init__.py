"""Key-value storage backends (SQLite file, in-memory)."""
