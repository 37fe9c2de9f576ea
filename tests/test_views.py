import json
from unittest import mock

import pytest
from django.test import RequestFactory, override_settings

from payoskit import views
from payoskit.signals import payment_webhook_received, payout_webhook_received
from payoskit.utils.checksum import create_payout_signature
from payoskit.webhooks import parse_payment_webhook, validate_payment_webhook

PAYOUT_KEY = 'payout-checksum-key'


def _payment_body(**data):
    body_data = {
        'orderCode': 123456,
        'reference': 'FT123',
        'amount': 150000,
        'description': 'Booking 42',
        'accountNumber': '0123',
        'paymentLinkId': 'pl_1',
    }
    body_data.update(data)
    return {'code': '00', 'desc': 'success', 'success': True, 'data': body_data, 'signature': 'abc'}


def _post(view, body, **extra):
    raw = body if isinstance(body, (str, bytes)) else json.dumps(body)
    request = RequestFactory().post('/callback/', data=raw, content_type='application/json', **extra)
    return view(request)


@pytest.fixture
def received():
    handler = mock.Mock()
    payment_webhook_received.connect(handler, dispatch_uid='test-payment')
    payout_webhook_received.connect(handler, dispatch_uid='test-payout')
    yield handler
    payment_webhook_received.disconnect(dispatch_uid='test-payment')
    payout_webhook_received.disconnect(dispatch_uid='test-payout')


def test_validate_and_parse_payment_webhook():
    body = _payment_body()

    assert validate_payment_webhook(body)
    assert not validate_payment_webhook(_payment_body(reference=''))
    assert not validate_payment_webhook({'data': None})
    assert not validate_payment_webhook([])

    data = parse_payment_webhook(body)
    assert data.order_code == 123456
    assert data.currency == 'VND'
    assert data.payment_link_id == 'pl_1'


def test_payment_callback_accepts_valid_body(received):
    response = _post(views.payment_callback, _payment_body())

    assert response.status_code == 200
    assert received.call_count == 1
    assert received.call_args.kwargs['data'].reference == 'FT123'


def test_payment_callback_rejects_missing_fields(received):
    response = _post(views.payment_callback, _payment_body(amount=None))

    assert response.status_code == 400
    assert received.call_count == 0


def test_payment_callback_rejects_invalid_json():
    assert _post(views.payment_callback, '{not json').status_code == 400


def test_payment_callback_requires_post():
    request = RequestFactory().get('/callback/')
    assert views.payment_callback(request).status_code == 405


@override_settings(PAYOS_WEBHOOK_VERIFY_IPS=['10.0.0.1'])
def test_payment_callback_ip_allow_list():
    assert _post(views.payment_callback, _payment_body(), REMOTE_ADDR='10.0.0.2').status_code == 403
    assert _post(views.payment_callback, _payment_body(), REMOTE_ADDR='10.0.0.1').status_code == 200
    assert _post(
        views.payment_callback, _payment_body(),
        REMOTE_ADDR='10.0.0.2', HTTP_X_FORWARDED_FOR='10.0.0.1, 10.0.0.2'
    ).status_code == 200


def test_payout_callback_valid_signature(received):
    body = {'id': 'po_1', 'referenceId': 'REF-1', 'approvalState': 'APPROVED', 'category': ['REFUND']}
    signature = create_payout_signature(body, PAYOUT_KEY)

    response = _post(views.payout_callback, body, HTTP_X_SIGNATURE=signature.upper())

    assert response.status_code == 200
    assert received.call_args.kwargs['payload'] == body


def test_payout_callback_invalid_signature(received):
    body = {'id': 'po_1', 'referenceId': 'REF-1'}
    signature = create_payout_signature({'id': 'po_2', 'referenceId': 'REF-1'}, PAYOUT_KEY)

    assert _post(views.payout_callback, body, HTTP_X_SIGNATURE=signature).status_code == 401
    assert _post(views.payout_callback, body).status_code == 401
    assert received.call_count == 0


@override_settings(PAYOS_PAYOUT_CHECKSUM_KEY='')
def test_payout_callback_without_checksum_key(received):
    assert _post(views.payout_callback, {'id': 'po_1'}).status_code == 200
    assert received.call_count == 1


def test_payout_callback_rejects_non_object_body():
    assert _post(views.payout_callback, [1, 2]).status_code == 400
