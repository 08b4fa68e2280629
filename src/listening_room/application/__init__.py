"""
Application Layer

Contains the use cases exposed to callers of the listening room.
This layer orchestrates domain objects and infrastructure to fulfill them.

Structure:
- services/: LibraryService facade (play, pause, current_active, elapsed)
- interfaces/: Port interfaces for infrastructure adapters
"""
