"""
Infrastructure layer package.

Adapters implementing domain ports: error trackers and the event bus.
"""
