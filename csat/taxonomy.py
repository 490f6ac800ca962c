# CSAT Relay Rating Taxonomy
# Maps the five survey ratings to tags and labels

RATING_TAGS = {
    '1': 'very_dissatisfied',
    '2': 'dissatisfied',
    '3': 'neutral',
    '4': 'satisfied',
    '5': 'very_satisfied'
}

RATING_TEXT = {
    '1': 'Very dissatisfied',
    '2': 'Dissatisfied',
    '3': 'Neutral',
    '4': 'Satisfied',
    '5': 'Very satisfied'
}

POLARITY_TAGS = {
    '1': 'csat-negative',
    '2': 'csat-negative',
    '3': 'csat-neutral',
    '4': 'csat-positive',
    '5': 'csat-positive'
}

UNKNOWN_TEXT = 'Unknown'


def _key(rating):
    # Ratings are literal strings; anything else is outside the scale
    if isinstance(rating, str) and rating in RATING_TAGS:
        return rating
    return None


def tag_for(rating):
    """Internal satisfaction tag (e.g. '5' -> 'very_satisfied'), '' if unknown"""
    key = _key(rating)
    if key is None:
        return ''
    return RATING_TAGS[key]


def sentiment_tags_for(rating):
    """Ticket tags for a rating, e.g. ['csat-5', 'csat-positive'].

    Returns an empty list for ratings outside '1'..'5'.
    """
    key = _key(rating)
    if key is None:
        return []
    return [f"csat-{key}", POLARITY_TAGS[key]]


def text_for(rating):
    """Human-readable label, 'Unknown' outside the scale"""
    key = _key(rating)
    if key is None:
        return UNKNOWN_TEXT
    return RATING_TEXT[key]
