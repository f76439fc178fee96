# Middleware package init
"""
Jokebox — Middleware Package
=============================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the logging middleware can attach it to the
    access log line. Responses unwind in reverse order, which is how the
    X-Request-ID header ends up on every response.
"""
