"""Runtime configuration for recipe import and duplicate detection."""

import dataclasses
import logging
import os
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

DISTANCE_METRICS = ("euclidean", "cosine")


@dataclasses.dataclass(frozen=True)
class Settings:
    """Pass-through configuration values.

    Attributes:
        duplicate_distance_threshold: Maximum embedding distance at which a
            candidate recipe is treated as already stored. Tuned per embedding
            model and metric.
        distance_metric: "euclidean" or "cosine".
        embedding_model: Bedrock model id used to embed recipe text.
        embedding_dimensions: Expected length of embedding vectors.
        aws_region: Region for the Bedrock runtime client.
        db_path: SQLite database holding imported recipes.
        log_level: Root log level for scripts.
    """

    duplicate_distance_threshold: float = 0.12
    distance_metric: str = "euclidean"
    embedding_model: str = "amazon.titan-embed-text-v1"
    embedding_dimensions: int = 1536
    aws_region: str = "us-east-1"
    db_path: str = "data/recipes.db"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables, keeping defaults for
        anything missing or malformed."""
        env = os.environ if environ is None else environ
        defaults = cls()

        metric = env.get("DISTANCE_METRIC", defaults.distance_metric).strip().lower()
        if metric not in DISTANCE_METRICS:
            logger.warning(
                f"Unknown DISTANCE_METRIC '{metric}', using {defaults.distance_metric}"
            )
            metric = defaults.distance_metric

        return cls(
            duplicate_distance_threshold=_env_number(
                env, "DUPLICATE_DISTANCE_THRESHOLD", defaults.duplicate_distance_threshold, float
            ),
            distance_metric=metric,
            embedding_model=env.get("EMBEDDING_MODEL", defaults.embedding_model),
            embedding_dimensions=_env_number(
                env, "VECTOR_DIM", defaults.embedding_dimensions, int
            ),
            aws_region=env.get("AWS_REGION", defaults.aws_region),
            db_path=env.get("RECIPE_DB_PATH", defaults.db_path),
            log_level=env.get("LOG_LEVEL", defaults.log_level).upper(),
        )


def _env_number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"Invalid value for {name}: '{raw}', using {default}")
        return default


def configure_logging(level: str = "INFO") -> None:
    """Install the root log handler used by the command-line scripts."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
