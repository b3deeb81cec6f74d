"""Infrastructure layer: clocks, timezone rule providers, and the host.

This layer depends on the domain layer and the standard library's
``zoneinfo`` database (backed by ``tzdata`` where the OS ships none).
It must never import from services, commands, or output.
"""
