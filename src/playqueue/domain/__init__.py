"""
Domain Layer

Pure queue logic with no knowledge of HTTP, files, or the event loop.
"""
