# CSAT Relay Shared Module
# Survey relay pieces used by the survey service

from .config import (
    ZENDESK_SUBDOMAIN,
    ZENDESK_ADMIN_EMAIL,
    ZENDESK_TOKEN,
    ANONYMOUS_EMAIL,
    ZendeskConfig,
    load_config
)

from .taxonomy import (
    tag_for,
    sentiment_tags_for,
    text_for
)

from .payloads import (
    SurveyReport,
    PayloadBuilder
)

from .zendesk import (
    GatewayResult,
    ZendeskGateway
)

from .relay import (
    SubmissionOutcome,
    SurveyRelay
)
