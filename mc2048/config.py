import os
from dataclasses import dataclass

MIN_SIZE = 4  # smallest supported board side
DEFAULT_SIZE = 4
WIN_TILE = 2048
SPAWN_TWO_PROBABILITY = 0.9  # otherwise a 4 is spawned
DEFAULT_DEPTH = 1000  # total rollouts per search
QUICK_DEPTH = 200  # interactive hints and the benchmark CLI


def worker_count(workers: int | None = None) -> int:
    """Resolve the number of search threads, defaulting to the CPU count."""
    if workers is None:
        return os.cpu_count() or 1
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")
    return workers


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass
class SearchConfig:
    depth: int = DEFAULT_DEPTH
    workers: int | None = None

    def __post_init__(self):
        if self.depth < 1:
            raise ValueError(f"depth must be at least 1, got {self.depth}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    @classmethod
    def from_env(cls, default_depth: int = DEFAULT_DEPTH) -> "SearchConfig":
        return cls(
            depth=_env_int("MC2048_DEPTH", default_depth),
            workers=_env_int("MC2048_WORKERS", None),
        )

    @property
    def threads(self) -> int:
        return worker_count(self.workers)
