# Middleware package init
"""
Food Ordering Backend — Middleware Package
============================================

Middleware Chain (execution order):
    Request → [Request ID] → [Logging] → [Auth Rate Limit] → [CORS] → Route

    1. Request ID: correlation ID for logs and error bodies
    2. Logging: access line with status and duration (429s included)
    3. Auth Rate Limit: reject login/register floods before any route work
    4. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
