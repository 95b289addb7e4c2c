"""Integration tests for components working together as a system.

Coverage:
    - API endpoints with real HTTP requests through the ASGI transport
    - PDF parsing of generated documents from upload to output record
    - URL and batch sources with a mocked HTTP client dependency
"""
