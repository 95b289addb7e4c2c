"""Test package for PDF Parse.

Provides test coverage for all components with unit tests for isolated
logic and integration tests for the HTTP API.

Structure:
    - unit/: Individual function and class tests
    - integration/: End-to-end request tests

PDFs are generated in fixtures with pypdf. URL sources use an httpx mock
transport, so no network access is needed.
Leverages pytest with pytest-check for soft assertions.
"""
