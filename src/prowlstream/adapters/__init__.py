"""Stream adapter layer — Connectors that turn indexer searches into streams.

Built-in adapters:
  - prowlarr: Prowlarr indexer manager (``/api/v1/search``)

Implement ``StreamAdapter`` to connect another indexer source.
"""
