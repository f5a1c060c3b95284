"""
motzkin_store.api

Self-contained catalog API the pipeline fetches from.

Responsibilities:
- FastAPI app factory and router modules.
- In-memory catalog standing in for the school-equipment backend.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The pipeline never imports this package; it only talks to it over HTTP.
