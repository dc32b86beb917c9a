"""Duplicate recipe detection by embedding distance and exact title."""

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_DUPLICATE_THRESHOLD = 0.12


@dataclasses.dataclass(frozen=True)
class NearestRecipe:
    id: Any
    title: str
    distance: float


@dataclasses.dataclass(frozen=True)
class DuplicateCheck:
    is_duplicate: bool
    matched_id: Optional[Any] = None
    distance: Optional[float] = None
    reason: Optional[str] = None  # 'embedding' or 'title'


class RecipeStore(ABC):
    """Read access to stored recipes needed for duplicate detection."""

    @abstractmethod
    def nearest_by_embedding(self, vector: Sequence[float]) -> Optional[NearestRecipe]:
        """Return the stored recipe closest to ``vector``, or None if the
        store holds no embeddings."""
        pass

    @abstractmethod
    def find_by_exact_title(self, title: str) -> Optional[Any]:
        """Return the id of a recipe whose title equals ``title`` ignoring
        case, or None."""
        pass


def euclidean_distances(vector: Sequence[float], matrix: np.ndarray) -> np.ndarray:
    """Euclidean distance from ``vector`` to each row of ``matrix``."""
    query = np.asarray(vector, dtype=np.float64)
    return np.linalg.norm(np.asarray(matrix, dtype=np.float64) - query, axis=1)


def cosine_distances(vector: Sequence[float], matrix: np.ndarray) -> np.ndarray:
    """Cosine distance (1 - cosine similarity) from ``vector`` to each row.

    Zero vectors are treated as maximally distant.
    """
    query = np.asarray(vector, dtype=np.float64)
    rows = np.asarray(matrix, dtype=np.float64)
    norms = np.linalg.norm(rows, axis=1) * np.linalg.norm(query)
    with np.errstate(divide="ignore", invalid="ignore"):
        similarity = np.where(norms > 0, rows @ query / norms, -1.0)
    return 1.0 - similarity


DISTANCE_FUNCTIONS = {
    "euclidean": euclidean_distances,
    "cosine": cosine_distances,
}


def find_duplicate(
    candidate_embedding: Optional[Sequence[float]],
    candidate_title: Optional[str],
    store: RecipeStore,
    threshold: float = DEFAULT_DUPLICATE_THRESHOLD,
) -> DuplicateCheck:
    """Decide whether a candidate recipe is already stored.

    Either signal is enough: the nearest stored embedding lies closer than
    ``threshold``, or a stored recipe has the same title ignoring case.
    Without an embedding (provider unavailable) only the title is checked.
    Store errors are logged and treated as "no match"; this never raises.

    Args:
        candidate_embedding: Embedding of the candidate's text, or None.
        candidate_title: Candidate recipe title.
        store: Stored recipes.
        threshold: Maximum distance treated as a duplicate. Depends on the
            embedding model and distance metric.

    Returns:
        A DuplicateCheck with the matched recipe id and nearest distance when
        known.
    """
    distance = None

    if candidate_embedding is not None and len(candidate_embedding) > 0:
        try:
            nearest = store.nearest_by_embedding(candidate_embedding)
        except Exception as e:
            logger.warning(f"Nearest-embedding lookup failed, using title only: {e}")
            nearest = None
        if nearest is not None:
            distance = float(nearest.distance)
            if distance < threshold:
                logger.info(
                    f"Duplicate detected for '{candidate_title}' "
                    f"(existing id={nearest.id}, dist={distance:.4f})"
                )
                return DuplicateCheck(True, nearest.id, distance, "embedding")
    else:
        logger.debug(f"No embedding for '{candidate_title}', checking title only")

    if candidate_title and candidate_title.strip():
        try:
            matched_id = store.find_by_exact_title(candidate_title.strip())
        except Exception as e:
            logger.warning(f"Title lookup failed for '{candidate_title}': {e}")
            matched_id = None
        if matched_id is not None:
            logger.info(f"Duplicate title '{candidate_title}' (existing id={matched_id})")
            return DuplicateCheck(True, matched_id, distance, "title")

    return DuplicateCheck(False, distance=distance)
