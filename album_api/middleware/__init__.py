"""
Album API - Middleware Package
===============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    - Request ID runs first so the logging middleware can tag each access
      log line with the correlation id.
    - Logging captures the final status code and duration on the way out.
"""
