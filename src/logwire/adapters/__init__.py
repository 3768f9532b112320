"""Adapters bridging logwire to other libraries."""
