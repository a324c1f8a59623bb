"""Schemas — Pydantic models for results crossing the service boundary."""
