"""Semantic similarity between resume and job description via an embedding provider.

Every failure mode (no credentials, provider error, malformed payload) yields
a zero semantic score, so the final score falls back to the rule signal.
"""

import logging
from typing import Any, List, Optional, Sequence

import numpy as np

from settings import Settings, build_client, load_settings

logger = logging.getLogger(__name__)

EMBEDDING_CHAR_BUDGET = 1000


def embed_text(text: str, client: Any, model: str) -> Optional[List[float]]:
    """Embedding vector for ``text``, or ``None`` when none could be obtained."""
    if client is None or not text or not text.strip():
        return None
    try:
        response = client.embeddings.create(model=model, input=text[:EMBEDDING_CHAR_BUDGET])
        values = response.data[0].embedding
        vector = [float(value) for value in values]
    except Exception as exc:
        logger.warning("Embedding skipped (%s): %s", model, exc)
        return None
    return vector or None


def cosine_similarity(a: Optional[Sequence[float]], b: Optional[Sequence[float]]) -> float:
    """Cosine similarity; 0.0 for missing, empty, mismatched or zero-norm vectors."""
    if a is None or b is None or len(a) == 0 or len(a) != len(b):
        return 0.0
    vec_a = np.asarray(a, dtype=float)
    vec_b = np.asarray(b, dtype=float)
    norm_a = np.linalg.norm(vec_a)
    norm_b = np.linalg.norm(vec_b)
    if not norm_a or not norm_b or not np.isfinite(norm_a) or not np.isfinite(norm_b):
        return 0.0
    return float(np.dot(vec_a, vec_b) / (norm_a * norm_b))


def score_semantic(
    resume_text: str,
    jd_text: str,
    client: Any = None,
    settings: Optional[Settings] = None,
) -> float:
    """Semantic score in [0, 100]; 0.0 whenever the provider cannot be used."""
    settings = settings or load_settings()
    if not settings.enable_semantic:
        return 0.0
    if client is None:
        client = build_client(settings)
    if client is None:
        return 0.0

    try:
        resume_vector = embed_text((resume_text or "")[:EMBEDDING_CHAR_BUDGET], client, settings.embedding_model)
        jd_vector = embed_text((jd_text or "")[:EMBEDDING_CHAR_BUDGET], client, settings.embedding_model)
        similarity = cosine_similarity(resume_vector, jd_vector)
    except Exception as exc:
        logger.warning("Embedding calculation failed: %s", exc)
        return 0.0

    return max(0.0, min(100.0, similarity * 100.0))
