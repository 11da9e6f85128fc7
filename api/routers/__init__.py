"""
FastAPI routers grouped by concern (homepage, REST resources).

Each file inside this package exposes an APIRouter that is included by
create_app() in api/app.py.
"""
