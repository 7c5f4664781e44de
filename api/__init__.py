"""ASGI entry point package."""
