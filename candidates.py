import logging

from pydantic import ValidationError

import matching_config
from errors import FetchFailedError
from models import MentorCandidate
from persistent_storage import get_active_mentors

logger = logging.getLogger(__name__)


def parse_candidates(rows):
    candidates = []
    for row in rows:
        try:
            candidates.append(MentorCandidate.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Skipping mentor row {row.get('mentorid', 'N/A')}: {e.error_count()} invalid field(s)")
    return candidates


def load_candidates(session, limit=None, verified_only=None):
    """Like fetch_candidates, but raises FetchFailedError when the backend call fails."""
    limit = limit if limit is not None else matching_config.MATCH_CANDIDATE_LIMIT
    if verified_only is None:
        verified_only = matching_config.MATCH_VERIFIED_ONLY

    rows = get_active_mentors(session.client, limit, verified_only=verified_only)
    candidates = [c for c in parse_candidates(rows) if c.active]
    logger.info(f"Fetched {len(candidates)} candidate mentors")
    return candidates[:limit]


def fetch_candidates(session, limit=None, verified_only=None):
    """Fetch up to `limit` active mentors.

    Never raises for backend problems: a failed fetch is logged and reported
    as an empty list so matching ends in "no matches" instead of an error.
    """
    try:
        return load_candidates(session, limit=limit, verified_only=verified_only)
    except FetchFailedError as e:
        logger.warning(f"Candidate fetch failed, continuing with no candidates: {e.message}")
        return []
