"""
Response cache backends for the Catalog Query Service.

- redis.RedisCache: in-memory stand-in for local development and tests
- redis_real.RedisCache: Redis-backed, selected when REDIS_URL is set
"""
