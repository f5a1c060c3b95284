"""
motzkin_store.catalog_clients

Catalog client package.

Responsibilities:
- Provide the "fetch JSON from URL" boundary the pipeline fetches through.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The pipeline should depend on this boundary (not on httpx directly).
