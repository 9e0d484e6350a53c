"""Descriptor models and host-object adapters."""
