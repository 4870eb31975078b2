"""Shared utilities: geometry, collision, spatial indexing, queues, randomness and logging."""
