"""
Unit tests for persevere.

Test individual components in isolation:
- Failure and PolicyConfig models (coercion, validation, exclusivity)
- Retry engine (attempt loop, policy evaluation, hooks, asyncio path)
- Backoff strategies (delay formulas, sleeping)
- Terminal handlers
- Policy registry, settings, logging configuration
"""
