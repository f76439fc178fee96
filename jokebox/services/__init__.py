# Services package init
"""
Jokebox — Services Layer
=========================

What:  Business logic sitting between routes (HTTP) and the document store.

Service Inventory:
    - JokeService: validation and store-error translation for create/list
    - seed_if_empty: one-time bootstrap of sample jokes at startup
    - UploadService: writes uploaded files into the upload directory
"""
