"""Procedural settlement generation.

A settlement is a bounded region of a larger world. It is generated once
from a seed and is then sampled per world coordinate by terrain painting
and entity spawning code.

Example usage:
    from thorpe.site.settlement import Settlement
    from thorpe.util import rng

    rng.init(1234)
    settlement = Settlement.generate((0, 0), None, rng.get("site.settlement"))
"""
