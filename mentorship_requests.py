import logging
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, ValidationError

from models import MentorshipRequest, RequestStatus
from persistent_storage import get_mentorship_requests, create_mentorship_request, update_mentorship_request

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_MESSAGE = "Hi, I would like to request mentorship based on our compatibility match."
ACCEPTED_RESPONSE_MESSAGE = "Mentorship request has been accepted!"
DECLINED_RESPONSE_MESSAGE = "Mentorship request has been declined."

ACCEPTED_WARNING = ("You already have an accepted mentorship. Sending another request is usually not needed. "
                    "Do you still want to continue?")
PENDING_WARNING = "You already have a pending mentorship request. You can still send another one."


class RequestDecision(str, Enum):
    PROCEED = "proceed"
    WARN_DEFAULT_CANCEL = "warn_default_cancel"
    WARN_ALLOW_PROCEED = "warn_allow_proceed"


class RequestAdvice(BaseModel):
    decision: RequestDecision
    warn: bool
    default_cancel: bool
    message: str = ""
    existing: List[MentorshipRequest] = Field(default_factory=list)


def advise_on_requests(existing):
    """Decide how to treat a new request given the mentee's open/accepted ones.

    Advisory only: nothing here stops two devices from sending requests at
    the same time.
    """
    if any(r.status == RequestStatus.ACCEPTED for r in existing):
        return RequestAdvice(decision=RequestDecision.WARN_DEFAULT_CANCEL, warn=True, default_cancel=True,
                             message=ACCEPTED_WARNING, existing=existing)
    if any(r.status == RequestStatus.PENDING for r in existing):
        return RequestAdvice(decision=RequestDecision.WARN_ALLOW_PROCEED, warn=True, default_cancel=False,
                             message=PENDING_WARNING, existing=existing)
    return RequestAdvice(decision=RequestDecision.PROCEED, warn=False, default_cancel=False, existing=existing)


def parse_requests(rows):
    requests = []
    for row in rows:
        try:
            requests.append(MentorshipRequest.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Ignoring mentorship request {row.get('id', 'N/A')}: {e.error_count()} invalid field(s)")
    return requests


def check_existing_requests(session, mentee_id):
    """Raises FetchFailedError if the requests cannot be read."""
    rows = get_mentorship_requests(session.client, mentee_id,
                                   [RequestStatus.PENDING.value, RequestStatus.ACCEPTED.value])
    existing = [r for r in parse_requests(rows)
                if r.status in (RequestStatus.PENDING, RequestStatus.ACCEPTED)]
    return advise_on_requests(existing)


def request_mentorship(session, mentee_id, mentor_id, message=DEFAULT_REQUEST_MESSAGE):
    request_row = {
        'mentee_id': mentee_id,
        'mentor_id': mentor_id,
        'status': RequestStatus.PENDING.value,
        'message': message,
    }
    created = create_mentorship_request(session.client, request_row)
    logger.info(f"Mentee {mentee_id} requested mentorship from mentor {mentor_id}")
    return MentorshipRequest.model_validate(created or request_row)


def respond_to_request(session, request_id, accept):
    status = RequestStatus.ACCEPTED if accept else RequestStatus.DECLINED
    updates = {
        'status': status.value,
        'response_message': ACCEPTED_RESPONSE_MESSAGE if accept else DECLINED_RESPONSE_MESSAGE,
    }
    updated = update_mentorship_request(session.client, request_id, updates)
    logger.info(f"Mentorship request {request_id} {status.value}")
    if updated is None:
        return None
    return MentorshipRequest.model_validate(updated)
