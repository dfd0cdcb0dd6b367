"""
Bookmarks Service: Services Layer
====================================

Service Inventory:
    - BookmarkService: list/get/create/delete with create-time validation
    - sanitizer: pure output sanitization of bookmark text fields
"""
