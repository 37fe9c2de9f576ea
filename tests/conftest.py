import sys
from pathlib import Path

# Ensure repo root is on sys.path so `import payoskit` works under all pytest import modes.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import django  # noqa: E402
from django.conf import settings  # noqa: E402

TEST_CHECKSUM_KEY = 'payment-checksum-key'
TEST_PAYOUT_CHECKSUM_KEY = 'payout-checksum-key'


def pytest_configure():
    if settings.configured:
        return
    settings.configure(
        DEBUG=True,
        SECRET_KEY='payoskit-tests',
        ALLOWED_HOSTS=['*'],
        INSTALLED_APPS=['payoskit'],
        ROOT_URLCONF='payoskit.urls',
        DATABASES={},
        PAYOS_API_BASE_URL='https://api.payos.test',
        PAYOS_CLIENT_ID='client-id',
        PAYOS_API_KEY='api-key',
        PAYOS_CHECKSUM_KEY=TEST_CHECKSUM_KEY,
        PAYOS_PAYOUT_CLIENT_ID='payout-client-id',
        PAYOS_PAYOUT_API_KEY='payout-api-key',
        PAYOS_PAYOUT_CHECKSUM_KEY=TEST_PAYOUT_CHECKSUM_KEY,
    )
    django.setup()
