"""Pydantic models for rjy configuration."""
