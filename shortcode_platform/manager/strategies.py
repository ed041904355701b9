"""
Strategies for short-code generation in shortcode_platform.

Provided strategies:
- RandomStrategy: `length` characters drawn uniformly from an alphabet (default 62 alnum)
- SequentialStrategy: prefix + zero-padded counter, e.g. "test001", "test002"

Both satisfy `generate() -> str` with no arguments. Neither checks uniqueness;
the manager does that against storage and retries a bounded number of times.

Configuration (via shortcode_platform.config.settings):
- CODE_STRATEGY: "random" (default) or "sequential"
- CODE_LENGTH / CODE_ALPHABET: RandomStrategy parameters
- SEQ_PREFIX / SEQ_PADDING / SEQ_START: SequentialStrategy parameters

Notes:
- SequentialStrategy keeps a plain integer counter. It is not safe to share
  across threads without external serialization.
"""

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional, Type

from shortcode_platform.config import DEFAULT_ALPHABET, settings
from shortcode_platform.exceptions import InvalidArgumentError

log = logging.getLogger(__name__)


class BaseStrategy(ABC):
    """Abstract base for code generation strategies."""

    @abstractmethod
    def generate(self) -> str:  # pragma: no cover
        """Return a candidate short code."""
        raise NotImplementedError


@dataclass(frozen=True)
class RandomStrategy(BaseStrategy):
    """
    Uniform random codes over `alphabet`.
    Collision avoidance is left to the caller.
    """
    length: int = 6
    alphabet: str = DEFAULT_ALPHABET
    _rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def __post_init__(self):
        if self.length < 1:
            raise InvalidArgumentError("Code length must be at least 1")
        if not self.alphabet:
            raise InvalidArgumentError("Alphabet cannot be empty")

    def generate(self) -> str:
        return "".join(self._rng.choice(self.alphabet) for _ in range(self.length))


class SequentialStrategy(BaseStrategy):
    """
    Counter-based codes: prefix + str(counter).zfill(padding), then counter += 1.

    Padding is a minimum width; counters wider than `padding` are emitted in
    full ("t1000" with padding 3).
    """

    def __init__(self, prefix: str = "", padding: int = 3, start: int = 1):
        if padding < 1:
            raise InvalidArgumentError("Padding must be at least 1")
        if start < 1:
            raise InvalidArgumentError("Start must be at least 1")
        self._prefix = prefix
        self._padding = padding
        self._counter = start

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def padding(self) -> int:
        return self._padding

    @property
    def counter(self) -> int:
        """Value used by the next `generate()` call."""
        return self._counter

    @counter.setter
    def counter(self, value: int) -> None:
        if value < 1:
            raise InvalidArgumentError("Counter must be at least 1")
        self._counter = value

    def generate(self) -> str:
        code = f"{self._prefix}{str(self._counter).zfill(self._padding)}"
        self._counter += 1
        return code

    def __repr__(self) -> str:
        return f"SequentialStrategy(prefix={self._prefix!r}, padding={self._padding}, counter={self._counter})"


# Strategy registry and factory
STRATEGY_REGISTRY: Dict[str, Type[BaseStrategy]] = {
    "random": RandomStrategy,
    "rand": RandomStrategy,
    "sequential": SequentialStrategy,
    "seq": SequentialStrategy,
}


def get_strategy_from_config(name: Optional[str] = None) -> BaseStrategy:
    """
    Resolve the active strategy from parameter or settings.CODE_STRATEGY and
    construct it with the matching settings.
    """
    key = (name or settings.CODE_STRATEGY or "random").strip().lower()
    cls = STRATEGY_REGISTRY.get(key)
    if cls is None:
        raise InvalidArgumentError(f"Unknown code strategy: {key!r}")
    log.info("Using code strategy: %s -> %s", key, cls.__name__)

    if cls is SequentialStrategy:
        return SequentialStrategy(
            prefix=settings.SEQ_PREFIX,
            padding=settings.SEQ_PADDING,
            start=settings.SEQ_START,
        )
    return RandomStrategy(length=settings.CODE_LENGTH, alphabet=settings.CODE_ALPHABET)
