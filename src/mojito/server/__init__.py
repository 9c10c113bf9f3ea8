"""ASGI server boundary: request handling, error recovery, response sending."""
