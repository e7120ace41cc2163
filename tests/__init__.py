"""Test suite for SessionGuard.

Test structure follows the test pyramid:
- unit/: Unit tests - domain logic and handlers in isolation
- integration/: Integration tests - real adapters (crypto, logging, storage)
- api/: API endpoint tests - HTTP request/response with stub handlers
"""
