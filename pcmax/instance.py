import random

from pcmax.errors import InvalidConfigurationError
from pcmax.models import Assignment, Durations

DURATION_MIN = 1
DURATION_MAX = 100


def generate_durations(
    n: int, seed: int = 0, low: int = DURATION_MIN, high: int = DURATION_MAX
) -> Durations:
    """Generate ``n`` task durations drawn uniformly from ``[low, high]``."""
    rng = random.Random(seed)
    return [rng.randint(low, high) for _ in range(n)]


def generate_initial_assignment(n: int, m: int, seed: int = 0) -> Assignment:
    """Assign every task to a machine drawn uniformly from ``[0, m)``."""
    if m < 1:
        raise InvalidConfigurationError(f"machine_count must be >= 1, got {m}")
    rng = random.Random(seed)
    return [rng.randrange(m) for _ in range(n)]


def instance_seed(base_seed: int, m: int, n: int, replication: int) -> int:
    """Reproducible seed for one experiment cell (m, n, replication)."""
    return ((base_seed * 1009 + m) * 1009 + n) * 1009 + replication
