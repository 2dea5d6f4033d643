"""Infrastructure services: token generation and email."""
