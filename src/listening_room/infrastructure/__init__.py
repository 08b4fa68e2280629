"""
Infrastructure Layer

Adapters for the ports defined in the domain and application layers:
- persistence/: SQLite database and repositories
- messaging/: pub/sub notifier
"""
