"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - formatting/: Rewrite rules, modes, page splitting and statistics
    - parsing/: Source resolution and text extraction
    - models/ and config: Pydantic validation and serialization
    - pipeline and CLI: Output assembly and batch failure policy

Leverages pytest-check for multiple assertions per test.
"""
