"""ORM models bound to the shared declarative base."""
