import logging

from models import VoteTally
from persistent_storage import (convert_to_int, get_mentor_votes, get_votes_by_user, upsert_mentor_vote,
                                delete_mentor_vote, update_mentor_vote_counts)

logger = logging.getLogger(__name__)

UPVOTE = 1
DOWNVOTE = -1


def get_user_votes(session, mentee_id):
    votes = {}
    for row in get_votes_by_user(session.client, mentee_id):
        mentor_id = convert_to_int(row.get('mentorid'))
        if mentor_id is not None:
            votes[mentor_id] = convert_to_int(row.get('vote')) or 0
    return votes


def count_votes(vote_rows):
    values = [convert_to_int(row.get('vote')) for row in vote_rows]
    return values.count(UPVOTE), values.count(DOWNVOTE)


def cast_vote(session, mentee_id, mentor_id, vote, previous_vote=0):
    """Vote on a mentor. Pressing the same vote again clears it.

    The mentor's upvotes/downvotes columns are recounted from mentor_votes
    after every change.
    """
    if vote not in (UPVOTE, DOWNVOTE):
        raise ValueError(f"vote must be {UPVOTE} or {DOWNVOTE}, got {vote!r}")

    new_vote = 0 if previous_vote == vote else vote
    if new_vote == 0:
        delete_mentor_vote(session.client, mentor_id, mentee_id)
    else:
        upsert_mentor_vote(session.client, mentor_id, mentee_id, new_vote)

    upvotes, downvotes = count_votes(get_mentor_votes(session.client, mentor_id))
    update_mentor_vote_counts(session.client, mentor_id, upvotes, downvotes)
    logger.info(f"Mentor {mentor_id} now has {upvotes} up / {downvotes} down votes")

    return VoteTally(mentor_id=mentor_id, upvotes=upvotes, downvotes=downvotes, user_vote=new_vote)
