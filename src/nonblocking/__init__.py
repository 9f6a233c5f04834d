"""Cancellable background work with progress marshaled onto an owner context."""

__version__ = "0.1.0"
