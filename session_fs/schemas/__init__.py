"""Pydantic schemas for claude-session-fs."""
