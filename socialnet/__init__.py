"""Entity-CRUD service layer for a social-networking backend."""

__version__ = "1.0.0"
