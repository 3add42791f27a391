# Routes package init
"""
Food Ordering Backend — API Routes Package
============================================

Route Inventory:
    - menus.py:   GET /api/all-menus, GET/PUT/DELETE /api/menus/{id},
                  POST /api/menus
    - auth.py:    POST /api/register, POST /api/login, GET /api/me
    - health.py:  GET /health, GET /

Routes are thin: extract input, call one store operation, build the
response model. Business rules live in the services package.
"""
