"""Core decision and activation logic."""
