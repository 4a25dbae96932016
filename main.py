import logging
import os
import sys

import matching_config
from calculate_scores import get_compatibility_level
from errors import MatchingError
from match_ranker import CursorSignal
from matching import attach_reviews, find_matches
from mentee_profiles import load_mentee_profile
from mentorship_requests import check_existing_requests
from persistent_storage import get_supabase_client
from session import sign_in


def describe_match(position, total, match):
    level = get_compatibility_level(match.compatibility_score)
    lines = [f"Match {position} of {total}: {match.mentor_name} ({match.mentor_experience_level})",
             f"  {level} match: {match.compatibility_score}% "
             f"(skills {match.skills_score}%, roles {match.roles_score}%)"]
    if match.matching_skills:
        lines.append(f"  Shared skills: {', '.join(match.matching_skills)}")
    if match.matching_roles:
        lines.append(f"  Shared roles: {', '.join(match.matching_roles)}")
    if match.testimonial_stats and match.testimonial_stats.total_reviews:
        stats = match.testimonial_stats
        lines.append(f"  Rated {stats.average_rating:.1f}/5 from {stats.total_reviews} reviews")
    return "\n".join(lines)


def run_matching_session(session):
    mentee = load_mentee_profile(session)
    print(f"Finding mentors for {mentee.name or mentee.user_id} ({mentee.current_level.value})")

    if mentee.mentee_id is not None:
        advice = check_existing_requests(session, mentee.mentee_id)
        if advice.warn:
            print(advice.message)

    match_session = find_matches(session, mentee)
    if not match_session.has_matches:
        print(match_session.message)
        return match_session

    cursor = match_session.cursor
    while True:
        match = attach_reviews(session, cursor.current())
        print(describe_match(cursor.position, cursor.total, match))
        if cursor.next() == CursorSignal.END_OF_MATCHES:
            print("No more mentors to show.")
            break

    return match_session


if __name__ == '__main__':
    logging.basicConfig(level=matching_config.LOG_LEVEL, format=matching_config.LOG_FORMAT)

    email = os.environ.get('MATCH_USER_EMAIL')
    password = os.environ.get('MATCH_USER_PASSWORD')
    if not email or not password:
        print("Set MATCH_USER_EMAIL and MATCH_USER_PASSWORD to run a matching session.")
        sys.exit(1)

    try:
        supabase = get_supabase_client()
        run_matching_session(sign_in(supabase, email, password))
    except MatchingError as e:
        print(f"Error: {e}")
        sys.exit(1)
