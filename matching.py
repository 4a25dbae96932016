import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError

import matching_config
from calculate_scores import combine_scores, score_candidates
from candidates import load_candidates
from errors import FetchFailedError
from helpers import round_half_up
from match_ranker import MatchCursor, rank_matches
from models import MatchResult, MenteeProfile
from persistent_storage import get_matches
from testimonials import get_mentor_stats, get_mentor_testimonials

logger = logging.getLogger(__name__)

NO_MATCHES_MESSAGE = "No mentors found matching your criteria. Try expanding your search criteria."
FETCH_FAILED_MESSAGE = "Could not load mentors right now. Please check your connection and try again."
LOCAL_SOURCE = "local"
REMOTE_SOURCE = "remote"


class MatchSession(BaseModel):
    """One "Find my matches" run: the mentee, a ranked cursor and a status message."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    mentee: MenteeProfile
    cursor: MatchCursor
    message: Optional[str] = None
    fetch_failed: bool = False

    @property
    def has_matches(self):
        return self.cursor.total > 0


def match_from_rpc_row(row, mentee_user_id):
    skills_score = round_half_up(float(row.get('skills_score') or 0))
    roles_score = round_half_up(float(row.get('roles_score') or 0))
    mentor_id = row.get('mentorid') or row.get('mentor_id')

    return MatchResult(
        mentee_user_id=mentee_user_id,
        mentor_id=mentor_id,
        mentor_user_id=row.get('userid'),
        mentor_name=row.get('mentor_name') or f"Mentor {mentor_id}",
        skills_score=skills_score,
        roles_score=roles_score,
        # recomputed so the stored value always agrees with the two parts
        compatibility_score=combine_scores(skills_score, roles_score),
        matching_skills=row.get('matching_skills'),
        matching_roles=row.get('matching_roles'),
        mentor_experience_level=row.get('mentor_experience_level') or "Unknown",
        mentor_location=row.get('mentor_location'),
        mentor_hourly_rate=row.get('mentor_hourly_rate'),
        mentor_availability=row.get('mentor_availability'),
        mentor_bio=row.get('mentor_bio'),
        mentor_certifications=row.get('mentor_certifications'),
    )


def score_locally(session, mentee, limit=None):
    """Raises FetchFailedError when the mentors cannot be loaded."""
    candidates = load_candidates(session, limit=limit)
    return score_candidates(mentee, candidates)


def score_remotely(session, mentee):
    """Raises FetchFailedError when the get_matches procedure fails."""
    results = []
    for row in get_matches(session.client, mentee.user_id):
        try:
            results.append(match_from_rpc_row(row, mentee.user_id))
        except (ValidationError, TypeError, ValueError) as e:
            logger.warning(f"Skipping match row for mentor {row.get('mentorid', 'N/A')}: {e}")
    return results


def _score(session, mentee, limit, source):
    if source == REMOTE_SOURCE:
        try:
            return score_remotely(session, mentee)
        except FetchFailedError as e:
            logger.warning(f"get_matches failed ({e.message}), scoring on the client instead")
    return score_locally(session, mentee, limit=limit)


def find_matches(session, mentee, limit=None, source=None):
    """Score candidate mentors for `mentee` and return a ranked MatchSession.

    A zero score is still a match (shown as a "Limited" match). No matches at
    all is not an error either: the session carries NO_MATCHES_MESSAGE. When
    the mentors could not be loaded it carries FETCH_FAILED_MESSAGE instead.
    """
    source = source or matching_config.MATCH_SOURCE
    if source not in (LOCAL_SOURCE, REMOTE_SOURCE):
        raise ValueError(f"Unknown match source: {source}")

    try:
        results = _score(session, mentee, limit, source)
    except FetchFailedError as e:
        logger.warning(f"Could not load mentors for {mentee.user_id}: {e.message}")
        return MatchSession(mentee=mentee, cursor=MatchCursor([]), message=FETCH_FAILED_MESSAGE,
                            fetch_failed=True)

    ranked = rank_matches(results)
    logger.info(f"Found {len(ranked)} matches for {mentee.user_id}")

    message = None if ranked else NO_MATCHES_MESSAGE
    return MatchSession(mentee=mentee, cursor=MatchCursor(ranked), message=message)


def attach_reviews(session, match, limit=None):
    """Copy of `match` with rating stats and the first few testimonials.

    Review problems never block matching: on failure the match comes back as is.
    """
    limit = limit or matching_config.MATCH_REVIEW_PREVIEW
    try:
        stats = get_mentor_stats(session, match.mentor_id)
        testimonials = get_mentor_testimonials(session, match.mentor_id, limit=limit, offset=0)
    except FetchFailedError as e:
        logger.warning(f"Could not load reviews for mentor {match.mentor_id}: {e.message}")
        return match

    return match.model_copy(update={'testimonial_stats': stats, 'testimonials': testimonials})
