"""Infrastructure layer: persistence, auth primitives, email and the HTTP API."""
