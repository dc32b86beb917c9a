"""Recipe similarity: embeddings and duplicate detection."""

from .duplicates import (
    DEFAULT_DUPLICATE_THRESHOLD,
    DISTANCE_FUNCTIONS,
    DuplicateCheck,
    NearestRecipe,
    RecipeStore,
    cosine_distances,
    euclidean_distances,
    find_duplicate,
)
from .embeddings import BedrockEmbeddingProvider, build_embedding_text

__all__ = [
    "DEFAULT_DUPLICATE_THRESHOLD",
    "DISTANCE_FUNCTIONS",
    "DuplicateCheck",
    "NearestRecipe",
    "RecipeStore",
    "cosine_distances",
    "euclidean_distances",
    "find_duplicate",
    "BedrockEmbeddingProvider",
    "build_embedding_text",
]
