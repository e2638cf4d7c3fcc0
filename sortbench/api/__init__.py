"""HTTP API layer (FastAPI).

This module exposes the batch sorting surface:
- `POST /process-single`: sort each array in turn
- `POST /process-concurrent`: sort each array on its own thread
- `GET /healthz`, `GET /version`

The API is intentionally thin: the sorting itself lives in `sortbench.runtime`.
"""
