"""
Runtime package for the applog server.

This package contains:
- API layer (FastAPI server + routes)
- Store (partitioned, append-only log files)
- Models (Pydantic request/response and record schemas)
"""
