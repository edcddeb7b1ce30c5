"""
Menu API — Middleware Package
=============================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [Security Headers] → [GZip] → [CORS] → Route

    Request ID runs first so the access log line and every log record of
    the request carry the id; Logging wraps the rest to time it in full.
"""
