# CSAT Relay Payloads
# Builds the Zendesk ticket update and profile event bodies

from dataclasses import dataclass

from .config import ANONYMOUS_EMAIL, EVENT_SOURCE, EVENT_TYPE
from .helpers import as_text, clean_id, is_present, utc_timestamp
from .taxonomy import sentiment_tags_for, tag_for, text_for

POSITIVE_PLACEHOLDER = '—'

COMMENT_TEMPLATE = (
    "Customer Feedback Survey:\n"
    "Rating: {rating}/5 – {label}\n"
    "What went well: {positive}\n"
    "What can we improve: {improvement}"
)


@dataclass(frozen=True)
class SurveyReport:
    """One survey submission as posted by the help center page"""
    ticket_id: object = None
    rating: object = None
    positive: object = None
    improvement: object = None
    user_email: object = None

    @classmethod
    def from_payload(cls, data):
        """Pick the survey fields out of a parsed JSON body.

        Anything that is not a JSON object yields an empty report,
        which fails validation.
        """
        if not isinstance(data, dict):
            return cls()
        return cls(
            ticket_id=clean_id(data.get('ticketId')),
            rating=data.get('rating'),
            positive=data.get('positive'),
            improvement=data.get('improvement'),
            user_email=data.get('userEmail')
        )

    @property
    def is_valid(self):
        return is_present(self.ticket_id) and is_present(self.rating)

    @property
    def email(self):
        return self.user_email if is_present(self.user_email) else ANONYMOUS_EMAIL


class PayloadBuilder:
    """Turns a validated SurveyReport into Zendesk request bodies."""

    def __init__(self, config, clock=utc_timestamp):
        self.config = config
        self.clock = clock

    def build_comment(self, report):
        positive = report.positive if is_present(report.positive) else POSITIVE_PLACEHOLDER
        return COMMENT_TEMPLATE.format(
            rating=as_text(report.rating),
            label=text_for(report.rating),
            positive=as_text(positive),
            improvement=as_text(report.improvement)
        )

    def build_ticket_update(self, report):
        """Body for PUT /api/v2/tickets/{id}.json

        improvement is sent as received (null when absent); only the
        positive answer gets a fallback.
        """
        positive = report.positive if is_present(report.positive) else ''
        return {
            'ticket': {
                'custom_fields': [
                    {'id': self.config.rating_field_id, 'value': tag_for(report.rating)},
                    {'id': self.config.positive_field_id, 'value': positive},
                    {'id': self.config.improvement_field_id, 'value': report.improvement}
                ],
                'tags': sentiment_tags_for(report.rating),
                'comment': {
                    'body': self.build_comment(report),
                    'public': False
                }
            }
        }

    def build_profile_event(self, report):
        """Body for POST /api/v2/user_profiles/events

        submitted_at is stamped here, when the event is built.
        """
        return {
            'profile': {
                'source': EVENT_SOURCE,
                'type': 'customer',
                'identifiers': [{'type': 'email', 'value': report.email}]
            },
            'event': {
                'source': EVENT_SOURCE,
                'type': EVENT_TYPE,
                'description': f"Survey submitted for ticket #{report.ticket_id}",
                'properties': {
                    'rating': report.rating,
                    'positive_feedback': report.positive,
                    'improvement_suggestions': report.improvement,
                    'ticket_id': report.ticket_id,
                    'submitted_at': self.clock()
                }
            }
        }
