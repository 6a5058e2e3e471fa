# cryptokit Test Suite
"""
Test suite including:
- Known-answer vectors (RFC / FIPS)
- Cross-checks against hashlib and the cryptography package
- Round-trip and edge-case tests (invalid inputs)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
