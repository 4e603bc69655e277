"""Commission terms of service."""

TERMS_OF_SERVICE = {
    'title': 'Commission Terms of Service',
    'last_updated': '2023-01-01',
    'sections': [
        {
            'title': 'General Terms',
            'items': [
                'By commissioning artwork, you agree to these terms.',
                'All artwork remains the intellectual property of the artist.',
                'You will receive the rights to display the commissioned artwork for personal use.',
                'Commercial use requires additional licensing and fees.',
                'The artist reserves the right to display commissioned work in their portfolio.',
            ],
        },
        {
            'title': 'Payment',
            'items': [
                'Full payment is required before the commission work begins.',
                'Prices are subject to change based on complexity and requirements.',
                'VIP clients receive a 25% discount on all commissions.',
                'Refunds are available only if work has not yet started.',
            ],
        },
        {
            'title': 'Process',
            'items': [
                'You will receive progress updates throughout the commission process.',
                'Revisions are limited to the agreed-upon number in your commission package.',
                'Major changes after approval of sketches may incur additional fees.',
                'Completion time varies based on commission complexity and current workload.',
            ],
        },
        {
            'title': 'Content Restrictions',
            'items': [
                'The artist reserves the right to refuse any commission for any reason.',
                'NSFW content will be marked accordingly and only visible to authenticated users.',
                'Certain subject matter may be declined at the artist\'s discretion.',
            ],
        },
    ],
}


def get_terms_of_service() -> dict:
    return TERMS_OF_SERVICE
