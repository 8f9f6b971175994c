"""Gemini settings and exceptions."""
