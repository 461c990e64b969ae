"""Infrastructure — database session management, record store, structured logging.

Invariants:
    - Only this package (and api/) touches SQLAlchemy sessions directly
    - core/ never imports from here

Design Decisions:
    - Record store lives next to the session manager: both are persistence adapters
"""
