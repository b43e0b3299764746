"""
HTTP API package: FastAPI app, routers, schemas and dependencies.
"""
