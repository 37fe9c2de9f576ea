"""
Views for PayOS callbacks.
"""

import json
import logging
from django.http import JsonResponse, HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST
from .config import PayOSConfig
from .constants import HEADER_SIGNATURE
from .exceptions import SerializationError
from .signals import payment_webhook_received, payout_webhook_received
from .utils.checksum import verify_payout_signature, verify_webhook_ip
from .webhooks import parse_payment_webhook, validate_payment_webhook

logger = logging.getLogger(__name__)


def _get_client_ip(request):
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip


def _load_body(request):
    try:
        return json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        return None


@csrf_exempt
@require_POST
def payment_callback(request):
    """
    Handle PayOS payment webhooks.
    """
    config = PayOSConfig.from_settings()
    if not verify_webhook_ip(_get_client_ip(request), config.webhook_verify_ips):
        logger.warning(f"Unauthorized Webhook IP: {_get_client_ip(request)}")
        return HttpResponse(status=403)

    data = _load_body(request)
    if data is None:
        return JsonResponse({'error': 'Invalid JSON'}, status=400)

    logger.info(f"Received payment callback: {data}")

    if not validate_payment_webhook(data):
        logger.warning("Payment callback is missing orderCode, reference or amount")
        return JsonResponse({'error': 'Missing payment data'}, status=400)

    payment_webhook_received.send(
        sender=payment_callback,
        data=parse_payment_webhook(data),
        payload=data
    )
    return JsonResponse({'status': 'received'})


@csrf_exempt
@require_POST
def payout_callback(request):
    """
    Handle PayOS payout callbacks.
    The x-signature header is checked against the body when a payout
    checksum key is configured.
    """
    config = PayOSConfig.from_settings()
    if not verify_webhook_ip(_get_client_ip(request), config.webhook_verify_ips):
        logger.warning(f"Unauthorized Webhook IP: {_get_client_ip(request)}")
        return HttpResponse(status=403)

    data = _load_body(request)
    if not isinstance(data, dict):
        return JsonResponse({'error': 'Invalid JSON'}, status=400)

    logger.info(f"Received payout callback: {data}")

    secret = config.payout.checksum_key
    if secret:
        signature = request.headers.get(HEADER_SIGNATURE, '')
        try:
            valid = verify_payout_signature(data, secret, signature)
        except SerializationError as e:
            logger.warning(f"Payout callback body cannot be canonicalized: {str(e)}")
            return JsonResponse({'error': 'Invalid payload'}, status=400)

        if not valid:
            logger.warning("Invalid payout callback signature")
            return HttpResponse(status=401)

    payout_webhook_received.send(sender=payout_callback, payload=data)
    return JsonResponse({'status': 'received'})
