"""
Core architecture components: DDD building blocks, shared utilities and ports.
"""
