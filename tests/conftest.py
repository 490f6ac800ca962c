import pytest

from csat.config import ZendeskConfig


@pytest.fixture
def config():
    return ZendeskConfig(
        subdomain='acme-test',
        admin_email='admin@acme.test',
        api_token='secret-token',
        rating_field_id=111,
        positive_field_id=222,
        improvement_field_id=333
    )


@pytest.fixture
def survey():
    return {
        'ticketId': '4821',
        'rating': '5',
        'positive': 'Great',
        'improvement': 'Nothing',
        'userEmail': 'a@b.com'
    }
