"""
Bookmarks Service: API Routes Package
========================================

Route Inventory:
    - bookmarks.py:  GET    /bookmarks          (list)
                     POST   /bookmarks          (create)
                     GET    /bookmarks/{id}     (get one)
                     DELETE /bookmarks/{id}     (delete)
    - health.py:     GET    /health             (service health check)

Routes stay thin: they read the request, call the service and set status
codes and headers. Validation and sanitization live in app.services.
"""
