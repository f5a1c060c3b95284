"""
motzkin_store.api.routers

HTTP routers for the catalog API.
"""

# Package marker.
