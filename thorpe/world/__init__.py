"""World-side collaborators of site generation.

These are the pieces a settlement reads from or writes into: the world
oracle (altitude, slope, rivers), per-column terrain samples, block
volumes, and chunk supplements that collect spawned entities.
"""
