"""Service layer modules: rate cache, expiration policy, and the bank."""
