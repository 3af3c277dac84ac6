"""
Pydantic datamodels used by the applog runtime.

Split into:
- log_models: LogRecord + LevelMatch
- api_models: HTTP request/response schemas
"""
