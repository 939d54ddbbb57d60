"""Contract tester for authentication HTTP endpoints."""
