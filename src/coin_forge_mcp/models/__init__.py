"""Pydantic models for project parameters, task schemas and saved projects."""
