"""State layer.

Holds the per-light desired-state cache consulted by the coordinator to
decide whether a light needs a push.
"""
