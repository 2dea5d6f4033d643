"""authcore - credential and token lifecycle service.

Issues, validates and expires the short-lived tokens that gate email
verification, session establishment and password reset, and manages the
password hash at rest.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
