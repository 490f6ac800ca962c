# CSAT Relay Config
# Central configuration for the survey relay

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# Zendesk
ZENDESK_SUBDOMAIN = os.environ.get('ZENDESK_SUBDOMAIN', 'con-acmesolution')
ZENDESK_ADMIN_EMAIL = os.environ.get('ZENDESK_ADMIN_EMAIL', '')
ZENDESK_TOKEN = os.environ.get('ZENDESK_TOKEN')

# Optional request timeout in seconds (unset = httpx default)
ZENDESK_TIMEOUT = os.environ.get('ZENDESK_TIMEOUT')

# Ticket custom field IDs
RATING_FIELD_ID = int(os.environ.get('RATING_FIELD_ID', 33041185023122))
POSITIVE_FIELD_ID = int(os.environ.get('POSITIVE_FIELD_ID', 33041276291218))
IMPROVEMENT_FIELD_ID = int(os.environ.get('IMPROVEMENT_FIELD_ID', 33041265803026))

# Profile events
EVENT_SOURCE = 'help_center_survey'
EVENT_TYPE = 'survey_submitted'
ANONYMOUS_EMAIL = 'anonymous@example.com'


@dataclass(frozen=True)
class ZendeskConfig:
    """Immutable settings handed to the gateway and payload builder."""
    subdomain: str
    admin_email: str
    api_token: Optional[str] = None
    rating_field_id: int = RATING_FIELD_ID
    positive_field_id: int = POSITIVE_FIELD_ID
    improvement_field_id: int = IMPROVEMENT_FIELD_ID
    timeout: Optional[float] = None

    @property
    def base_url(self):
        return f"https://{self.subdomain}.zendesk.com"

    @property
    def auth(self):
        """Basic credentials in Zendesk's API token form"""
        return (f"{self.admin_email}/token", self.api_token or '')


def load_config():
    """Freeze the environment-backed constants into a ZendeskConfig"""
    return ZendeskConfig(
        subdomain=ZENDESK_SUBDOMAIN,
        admin_email=ZENDESK_ADMIN_EMAIL,
        api_token=ZENDESK_TOKEN,
        rating_field_id=RATING_FIELD_ID,
        positive_field_id=POSITIVE_FIELD_ID,
        improvement_field_id=IMPROVEMENT_FIELD_ID,
        timeout=float(ZENDESK_TIMEOUT) if ZENDESK_TIMEOUT else None
    )
