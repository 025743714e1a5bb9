"""ZeroMQ transport."""
