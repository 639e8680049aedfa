"""Clients for the third-party services the generator talks to."""
