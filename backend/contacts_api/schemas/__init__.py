"""Pydantic schemas for outbound resource representations."""
