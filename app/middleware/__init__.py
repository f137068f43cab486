# Middleware package init
"""
Student Records API — Middleware Package
==========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry the correlation ID
    2. Logging: measures duration and records the final status code
"""
