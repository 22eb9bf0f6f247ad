"""
Album API - Routes Package
===========================

Route Inventory:
    - albums.py:  GET/POST /albums, GET/DELETE /albums/{id}
    - health.py:  GET /health

Routes stay thin: extract the input, call the AlbumStore, shape the response.
"""
