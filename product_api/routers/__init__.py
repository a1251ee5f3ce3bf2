"""
routers/ — FastAPI route modules.

Each file contains a thin APIRouter. Data access lives in services/.
Routers validate input, call services, and return responses.
"""
