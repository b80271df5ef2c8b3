"""Core logic: reaction lookup, signature verification, markup protection, relay.

Nothing in this package reads the environment; configuration and clients
are passed in explicitly.
"""
