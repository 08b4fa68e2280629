"""SQLite persistence for the listening room."""
