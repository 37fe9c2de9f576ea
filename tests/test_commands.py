import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from payoskit.utils.checksum import build_payout_signature_data, create_payout_signature

PAYOUT_KEY = 'payout-checksum-key'
PAYLOAD = {'toBin': '970422', 'amount': 1000, 'category': ['REFUND']}


@pytest.fixture
def payload_file(tmp_path):
    path = tmp_path / 'payload.json'
    path.write_text(json.dumps(PAYLOAD), encoding='utf-8')
    return str(path)


def test_sign_with_configured_key(payload_file):
    out = StringIO()
    call_command('payos_signature', file=payload_file, stdout=out)
    assert out.getvalue().strip() == create_payout_signature(PAYLOAD, PAYOUT_KEY)


def test_sign_with_explicit_key_and_data(payload_file):
    out = StringIO()
    call_command('payos_signature', file=payload_file, key='other', show_data=True, stdout=out)

    lines = out.getvalue().strip().splitlines()
    assert lines[0] == f"Data: {build_payout_signature_data(PAYLOAD)}"
    assert lines[1] == create_payout_signature(PAYLOAD, 'other')


def test_verify(payload_file):
    out = StringIO()
    signature = create_payout_signature(PAYLOAD, PAYOUT_KEY)
    call_command('payos_signature', file=payload_file, verify=signature, stdout=out)
    assert 'valid' in out.getvalue()

    with pytest.raises(CommandError):
        call_command('payos_signature', file=payload_file, verify='0' * 64, stdout=StringIO())


def test_invalid_json(tmp_path):
    path = tmp_path / 'bad.json'
    path.write_text('{nope', encoding='utf-8')

    with pytest.raises(CommandError):
        call_command('payos_signature', file=str(path), stdout=StringIO())
