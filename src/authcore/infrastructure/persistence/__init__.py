"""Persistence layer using SQLAlchemy 2.0 async."""
