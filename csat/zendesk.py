# CSAT Relay Zendesk Gateway
# The two authenticated calls the relay makes against Zendesk

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

SUCCESS = 'success'
REJECTED = 'rejected'
UNREACHABLE = 'unreachable'
MALFORMED = 'malformed'

# Raised before anything reaches the wire
MALFORMED_ERRORS = (
    httpx.InvalidURL,
    httpx.UnsupportedProtocol,
    httpx.LocalProtocolError,
    TypeError,
    ValueError
)


@dataclass(frozen=True)
class GatewayResult:
    """Outcome of a single Zendesk call.

    kind is one of SUCCESS, REJECTED (Zendesk answered with an error
    status), UNREACHABLE (no response) or MALFORMED (request never sent).
    status and body are only known when Zendesk answered.
    """
    kind: str
    status: Optional[int] = None
    body: Optional[object] = None
    error: Optional[str] = None

    @property
    def ok(self):
        return self.kind == SUCCESS


def _response_body(response):
    try:
        return response.json()
    except ValueError:
        return response.text


class ZendeskGateway:
    """Issues ticket updates and profile events with API token auth.

    One attempt per call, no retries.
    """

    def __init__(self, config, transport=None):
        self.config = config
        client_args = {
            'base_url': config.base_url,
            'auth': config.auth,
            'headers': {'Content-Type': 'application/json'}
        }
        if config.timeout is not None:
            client_args['timeout'] = config.timeout
        if transport is not None:
            client_args['transport'] = transport
        self.client = httpx.Client(**client_args)

    def update_ticket(self, ticket_id, payload):
        """PUT the survey fields, tags and internal comment onto a ticket.

        The id is escaped as a single path segment so it cannot leave
        /api/v2/tickets/ or drop the .json suffix.
        """
        segment = quote(str(ticket_id), safe='')
        return self._send('PUT', f"/api/v2/tickets/{segment}.json", payload)

    def publish_event(self, payload):
        """POST a survey_submitted event to the customer's profile"""
        return self._send('POST', '/api/v2/user_profiles/events', payload)

    def close(self):
        self.client.close()

    def _send(self, method, path, payload):
        try:
            response = self.client.request(method, path, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            body = _response_body(e.response)
            logger.error("Zendesk %s %s failed with status %s: %s", method, path, status, body)
            return GatewayResult(
                kind=REJECTED,
                status=status,
                body=body,
                error=f"Request failed with status code {status}"
            )
        except MALFORMED_ERRORS as e:
            logger.error("Could not build Zendesk request %s %s: %s", method, path, e)
            return GatewayResult(kind=MALFORMED, error=str(e) or e.__class__.__name__)
        except httpx.RequestError as e:
            logger.error("No response from Zendesk for %s %s: %r", method, path, e)
            return GatewayResult(kind=UNREACHABLE, error=str(e) or e.__class__.__name__)

        logger.info("Zendesk %s %s succeeded: %s", method, path, response.status_code)
        return GatewayResult(
            kind=SUCCESS,
            status=response.status_code,
            body=_response_body(response)
        )
