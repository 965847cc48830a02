# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Updated: 2026-02-19
# Description: settings.py
# -----------------------------------------------------------------------------
import os


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Match queries
# -----------------------------------------------------------------------------
# One page-size cap shared by both match queries
MAX_PAGE_SIZE = _env_int("MATCHING_MAX_PAGE_SIZE", 50)
DEFAULT_PAGE_SIZE = _env_int("MATCHING_DEFAULT_PAGE_SIZE", 10)

# How many neighbours we pull from the vector index before paginating
SEARCH_TOP_K = _env_int("MATCHING_SEARCH_TOP_K", 100)


# -----------------------------------------------------------------------------
# Embeddings
# -----------------------------------------------------------------------------
EMBEDDING_DIMENSIONS = _env_int("MATCHING_EMBEDDING_DIMENSIONS", 1536)

# Roughly 8k tokens for text-embedding-3-small
EMBEDDING_MAX_CHARS = _env_int("MATCHING_EMBEDDING_MAX_CHARS", 32000)

EMBEDDING_DEPLOYMENT_DEFAULT = _env("MATCHING_EMBEDDING_DEPLOYMENT_DEFAULT", "text-embedding-3-small")


# -----------------------------------------------------------------------------
# Indexing pipeline / worker
# -----------------------------------------------------------------------------
MAX_RETRIES = _env_int("MATCHING_MAX_RETRIES", 3)

WORKER_ENABLED = _env_bool("MATCHING_WORKER_ENABLED", True)
WORKER_INTERVAL_SECONDS = _env_float("MATCHING_WORKER_INTERVAL_SECONDS", 15.0)
WORKER_BATCH_SIZE = _env_int("MATCHING_WORKER_BATCH_SIZE", 10)
WORKER_SHARDS = _env_int("MATCHING_WORKER_SHARDS", 4)


# -----------------------------------------------------------------------------
# External calls
# -----------------------------------------------------------------------------
HTTP_TIMEOUT_SECONDS = _env_float("MATCHING_HTTP_TIMEOUT_SECONDS", 10.0)

JOBS_COLLECTION = _env("MATCHING_JOBS_COLLECTION", "snhub-jobs")
CANDIDATES_COLLECTION = _env("MATCHING_CANDIDATES_COLLECTION", "snhub-candidates")


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if MAX_PAGE_SIZE < 1:
    raise RuntimeError("MAX_PAGE_SIZE must be >= 1")

if not 1 <= DEFAULT_PAGE_SIZE <= MAX_PAGE_SIZE:
    raise RuntimeError("DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE")

if SEARCH_TOP_K < 1:
    raise RuntimeError("SEARCH_TOP_K must be >= 1")

if WORKER_SHARDS < 1:
    raise RuntimeError("WORKER_SHARDS must be >= 1")
