"""Infrastructure Layer: database, cache, retry and logging adapters.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Record store calls are wrapped by the retry executor at the service layer
"""
