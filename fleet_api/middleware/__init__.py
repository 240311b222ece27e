"""
Fleet API — Middleware Package
===============================

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log line can use the correlation ID
    2. Logging: measures duration and logs the final status
"""
