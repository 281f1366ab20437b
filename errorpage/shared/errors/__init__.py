"""
Shared error handling package.

Turns FastAPI exceptions into dispatch error events and renders
whatever the error listeners decide.
"""
