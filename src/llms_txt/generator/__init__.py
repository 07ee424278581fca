"""Markdown rendering of OpenAPI documents."""
