"""HTTP (FastAPI) adapter: routers, schemas, request wiring and error mapping."""
