"""
Album API - Services Layer
===========================

Service Inventory:
    - AlbumStore: data access for the albums table (list, fetch, insert, delete)
"""
