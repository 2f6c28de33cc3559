from typing import Optional
import random

from grimquill.sampler.sampler import Sampler


def create_sampler(seed: Optional[int] = None) -> Sampler:
    """
    Factory function to create a Sampler with its own random source.

    Args:
        seed: Seed for the random source (None for nondeterministic)

    Returns:
        Sampler instance
    """
    return Sampler(random.Random(seed))


__all__ = [
    "create_sampler",
    "Sampler",
]
