"""Pydantic request/response schemas; camelCase on the wire."""
