from typing import List, Mapping, Optional, Tuple
import logging
import random

# Configure logging
logger = logging.getLogger(__name__)


class Sampler:
    """
    Temperature-scaled weighted sampling over successor counts.

    Attributes:
        rng: Random source used for every draw
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        """
        Initialize the sampler.

        Args:
            rng: Random source; a fresh unseeded random.Random if omitted
        """
        self.rng = rng if rng is not None else random.Random()

    def weights(
        self, successor_counts: Mapping[str, int], temperature: float
    ) -> List[Tuple[str, float]]:
        """
        Apply temperature scaling to successor counts.

        Each count becomes (count / total) ** (1 / temperature): temperature
        below 1 sharpens the distribution, above 1 flattens it.

        Args:
            successor_counts: Mapping of successor token to positive count
            temperature: Sampling temperature, must be > 0

        Returns:
            List of (token, weight) pairs in iteration order

        Raises:
            ValueError: If the counts are empty or non-positive, or the
                temperature is not positive
        """
        if not successor_counts:
            raise ValueError("Cannot sample from empty successor counts")
        if temperature <= 0:
            raise ValueError("Temperature must be positive")

        total = 0
        for token, count in successor_counts.items():
            if count <= 0:
                raise ValueError(f"Count for {token!r} must be positive")
            total += count

        exponent = 1.0 / temperature
        return [
            (token, (count / total) ** exponent)
            for token, count in successor_counts.items()
        ]

    def select(self, successor_counts: Mapping[str, int], temperature: float) -> str:
        """
        Draw one successor token.

        Args:
            successor_counts: Mapping of successor token to positive count
            temperature: Sampling temperature, must be > 0

        Returns:
            One of the tokens in successor_counts

        Raises:
            ValueError: If the inputs are invalid (see `weights`)

        Example:
            >>> Sampler(random.Random(7)).select({"a": 3, "b": 1}, 1.0) in {"a", "b"}
            True
        """
        weighted = self.weights(successor_counts, temperature)
        weight_total = sum(weight for _, weight in weighted)

        if weight_total <= 0:
            # Every weight underflowed; the low-temperature limit is argmax
            best = max(successor_counts.items(), key=lambda item: item[1])[0]
            logger.debug(f"Weights underflowed at temperature {temperature}, using {best!r}")
            return best

        r = self.rng.random() * weight_total
        cumulative = 0.0

        for token, weight in weighted:
            cumulative += weight
            if cumulative >= r:
                return token

        return weighted[-1][0]
