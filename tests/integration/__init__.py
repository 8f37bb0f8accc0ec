"""
Integration tests for persevere.

Test the public entry points end to end:
- retry / retry_with_backoff / retry_with_exponential_backoff / retrying
- PolicyRegistry with real strategies, structlog events and Prometheus samples
"""
