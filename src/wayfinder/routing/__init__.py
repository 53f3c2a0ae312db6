"""Routing: route templates compiled once into a matcher and a builder.

Templates are parsed into a typed tree at registration time; the
resulting ``CompiledRoute`` is immutable and shared across requests.
"""
