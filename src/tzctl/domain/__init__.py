"""Domain layer: ticks, calendar fields, transition rules, and zone resolution.

This layer depends only on the standard library.
It must never import from services, infrastructure, commands, or config.
"""
