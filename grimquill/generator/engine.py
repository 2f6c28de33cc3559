from typing import FrozenSet, List, Optional
import logging
import random

from grimquill.chain_table.chain_table import ChainTable
from grimquill.errors import EmptyModelError, ValidationError
from grimquill.generator.formatter import TextFormatter
from grimquill.generator.types import GenerationRequest, GenerationResult, StopReason
from grimquill.sampler.sampler import Sampler
from grimquill.tokenizer.base import TokenizerBase

# Configure logging
logger = logging.getLogger(__name__)

# Appended between sentences when generation continues past a stop token
SENTENCE_SEPARATOR = " "


class Generator:
    """
    Autoregressive text generator driven by a chain table.

    Attributes:
        table: Chain table consulted for successors
        tokenizer: Tokenizer for seeds and for detokenizing the output
        stop_tokens: Tokens that may end generation
        rng: Random source shared with the sampler
        sampler: Weighted successor sampler
        formatter: Output post-processor
    """

    def __init__(
        self,
        table: ChainTable,
        tokenizer: TokenizerBase,
        stop_tokens: FrozenSet[str],
        rng: Optional[random.Random] = None,
        formatter: Optional[TextFormatter] = None,
    ) -> None:
        """
        Initialize the generator.

        Args:
            table: ChainTable instance
            tokenizer: Tokenizer matching the table's token type
            stop_tokens: Tokens that may trigger termination
            rng: Random source (a fresh random.Random if omitted)
            formatter: Optional TextFormatter instance
        """
        self.table = table
        self.tokenizer = tokenizer
        self.stop_tokens = frozenset(stop_tokens)
        self.rng = rng if rng is not None else random.Random()
        self.sampler = Sampler(self.rng)
        self.formatter = formatter or TextFormatter()

    @property
    def order(self) -> int:
        return self.table.order

    def generate(self, request: Optional[GenerationRequest] = None) -> GenerationResult:
        """
        Generate text from a seed or from a random context.

        Args:
            request: Generation parameters (defaults if omitted)

        Returns:
            GenerationResult with the formatted text, raw tokens and stop reason

        Raises:
            ValidationError: If the seed has fewer tokens than the model order,
                or the token budget cannot hold the starting context
            EmptyModelError: If no seed is given and the table is empty

        Example:
            >>> result = generator.generate(GenerationRequest(seed="the quick"))
            >>> result.stop_reason
            <StopReason.SENTENCE_END: 'sentence_end'>
        """
        if request is None:
            request = GenerationRequest()

        if request.max_length < self.order:
            raise ValidationError(
                f"max_length must be at least the model order "
                f"({request.max_length} < {self.order} tokens)"
            )

        tokens = self._initial_tokens(request.seed, request.max_length)
        stop_reason = self._extend(tokens, request)

        text = self.formatter.format(self.tokenizer.detokenize(tokens))
        logger.info(f"Generated {len(tokens)} tokens, stopped on {stop_reason.value}")

        return GenerationResult(
            text=text,
            tokens=tokens,
            stop_reason=stop_reason,
            seeded=request.seed is not None,
        )

    def _initial_tokens(self, seed: Optional[str], max_length: int) -> List[str]:
        if seed is not None:
            tokens = self.tokenizer.tokenize(seed)
            if len(tokens) < self.order:
                raise ValidationError(
                    f"Seed text must be at least as long as the model order "
                    f"({len(tokens)} < {self.order} tokens)"
                )
            if len(tokens) > max_length:
                raise ValidationError(
                    f"Seed text is longer than max_length "
                    f"({len(tokens)} > {max_length} tokens)"
                )
            logger.debug(f"Starting from seed with {len(tokens)} tokens")
            return tokens

        contexts = self.table.contexts()
        if not contexts:
            raise EmptyModelError("Cannot generate from an empty model without a seed")

        context = self.rng.choice(contexts)
        logger.debug(f"Starting from random context {context!r}")
        return list(context)

    def _extend(self, tokens: List[str], request: GenerationRequest) -> StopReason:
        """
        Append sampled successors to `tokens` until a stop condition holds.

        Args:
            tokens: Token sequence to extend in place
            request: Generation parameters

        Returns:
            The reason generation stopped
        """
        while len(tokens) < request.max_length:
            context = tokens[-self.order:]
            successors = self.table.successors(context)

            if successors is None:
                logger.debug(f"Dead end at context {tuple(context)!r}")
                return StopReason.DEAD_END

            next_token = self.sampler.select(successors, request.temperature)
            tokens.append(next_token)

            if next_token not in self.stop_tokens:
                continue

            if self.rng.random() >= request.stop_probability:
                continue

            if (
                request.multiple_sentence_probability > 0
                and self.rng.random() < request.multiple_sentence_probability
            ):
                logger.debug("Continuing with another sentence")
                if len(tokens) < request.max_length:
                    tokens.append(SENTENCE_SEPARATOR)
                continue

            return StopReason.SENTENCE_END

        return StopReason.MAX_LENGTH
