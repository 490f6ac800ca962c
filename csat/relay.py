# CSAT Relay Orchestrator
# Validates a survey and relays it to Zendesk in two sequential steps

import logging
from dataclasses import dataclass
from typing import Optional

from .payloads import SurveyReport
from .zendesk import MALFORMED, REJECTED, UNREACHABLE

logger = logging.getLogger(__name__)

# States
RECEIVED = 'received'
VALIDATED = 'validated'
TICKET_UPDATED = 'ticket_updated'
EVENT_PUBLISHED = 'event_published'

# Outcome kinds
OK = 'success'
VALIDATION_ERROR = 'validation_error'
GATEWAY_REJECTED = 'gateway_rejected'
GATEWAY_UNREACHABLE = 'gateway_unreachable'
GATEWAY_MALFORMED = 'gateway_malformed'

# Steps
TICKET_UPDATE_STEP = 'ticket_update'
PROFILE_EVENT_STEP = 'profile_event'

SUCCESS_MESSAGE = 'Survey submitted and tracked successfully'
VALIDATION_MESSAGE = 'Missing ticketId or rating'
FAILURE_MESSAGE = 'Failed to submit survey'

_GATEWAY_KINDS = {
    REJECTED: GATEWAY_REJECTED,
    UNREACHABLE: GATEWAY_UNREACHABLE,
    MALFORMED: GATEWAY_MALFORMED
}


@dataclass(frozen=True)
class SubmissionOutcome:
    """Where a submission ended up and why.

    state is the last state reached. For gateway failures, failed_step
    names the call that failed and gateway holds its GatewayResult.
    """
    kind: str
    state: str
    failed_step: Optional[str] = None
    gateway: Optional[object] = None

    @property
    def ok(self):
        return self.kind == OK

    @property
    def http_status(self):
        if self.kind == OK:
            return 200
        if self.kind == VALIDATION_ERROR:
            return 400
        return 500

    @property
    def zendesk_status(self):
        if self.gateway is not None and self.gateway.status is not None:
            return self.gateway.status
        return 'unknown'

    def to_response(self):
        """JSON body returned to the survey page"""
        if self.kind == OK:
            return {'success': True, 'message': SUCCESS_MESSAGE}
        if self.kind == VALIDATION_ERROR:
            return {'success': False, 'message': VALIDATION_MESSAGE}
        return {
            'success': False,
            'message': FAILURE_MESSAGE,
            'error': self.gateway.error,
            'zendeskStatus': self.zendesk_status
        }


class SurveyRelay:
    """Runs one survey through Received -> Validated -> TicketUpdated -> EventPublished.

    The ticket update always completes before the event is attempted. A
    failed ticket update stops the run; a failed event after a successful
    ticket update is reported as a failure without undoing the ticket
    change.
    """

    def __init__(self, gateway, builder):
        self.gateway = gateway
        self.builder = builder

    def submit(self, data):
        report = SurveyReport.from_payload(data)
        state = RECEIVED

        if not report.is_valid:
            logger.info("Validation failed: missing ticketId or rating")
            return SubmissionOutcome(kind=VALIDATION_ERROR, state=state)
        state = VALIDATED

        logger.info(
            "Received survey data for ticket #%s | Rating: %s | Email: %s",
            report.ticket_id,
            report.rating,
            report.user_email or 'anonymous'
        )

        logger.info("Attempting to update ticket #%s", report.ticket_id)
        result = self.gateway.update_ticket(
            report.ticket_id,
            self.builder.build_ticket_update(report)
        )
        if not result.ok:
            return self._failed(state, TICKET_UPDATE_STEP, result)
        state = TICKET_UPDATED
        logger.info("Ticket updated successfully: %s", result.status)

        logger.info("Creating custom event for ticket #%s", report.ticket_id)
        result = self.gateway.publish_event(self.builder.build_profile_event(report))
        if not result.ok:
            logger.warning(
                "Ticket #%s was updated but the profile event failed; the update is kept",
                report.ticket_id
            )
            return self._failed(state, PROFILE_EVENT_STEP, result)
        state = EVENT_PUBLISHED
        logger.info("Custom event created successfully: %s", result.status)

        return SubmissionOutcome(kind=OK, state=state)

    def _failed(self, state, step, result):
        logger.error(
            "Survey relay failed at %s (%s): %s | Zendesk status: %s",
            step,
            result.kind,
            result.error,
            result.status if result.status is not None else 'unknown'
        )
        return SubmissionOutcome(
            kind=_GATEWAY_KINDS[result.kind],
            state=state,
            failed_step=step,
            gateway=result
        )
