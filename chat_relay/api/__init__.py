"""
API layer for the chat relay service.

Holds the HTTP health routes, the websocket event server and the FastAPI
dependencies that expose application state to them.
"""
