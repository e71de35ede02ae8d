"""State/store layer.

The auth and catalog stores are the only components allowed to change
client-side state. Both publish immutable snapshots to their subscribers.
"""
