"""
Management command to sign or verify a PayOS payout payload.
"""

import json
import sys

from django.core.management.base import BaseCommand, CommandError
from payoskit.config import PayOSConfig
from payoskit.exceptions import PayOSException
from payoskit.utils.checksum import (
    build_payout_signature_data,
    create_payout_signature,
    verify_payout_signature
)


class Command(BaseCommand):
    help = 'Sign or verify a PayOS payout payload'

    def add_arguments(self, parser):
        parser.add_argument(
            '--file',
            type=str,
            help='Path to a JSON payload (read from stdin if not provided)'
        )
        parser.add_argument(
            '--key',
            type=str,
            help='Checksum key (defaults to PAYOS_PAYOUT_CHECKSUM_KEY)'
        )
        parser.add_argument(
            '--verify',
            type=str,
            metavar='SIGNATURE',
            help='Verify this signature instead of signing'
        )
        parser.add_argument(
            '--show-data',
            action='store_true',
            help='Print the canonical data string that is signed'
        )

    def _read_payload(self, path):
        try:
            if path:
                with open(path, encoding='utf-8') as fh:
                    return json.load(fh)
            return json.load(sys.stdin)
        except OSError as e:
            raise CommandError(f"Cannot read payload: {str(e)}")
        except ValueError as e:
            raise CommandError(f"Payload is not valid JSON: {str(e)}")

    def handle(self, *args, **options):
        payload = self._read_payload(options.get('file'))
        key = options.get('key') or PayOSConfig.from_settings().payout.checksum_key

        try:
            if options['show_data']:
                self.stdout.write(f"Data: {build_payout_signature_data(payload)}")

            if options.get('verify'):
                if verify_payout_signature(payload, key, options['verify']):
                    self.stdout.write(self.style.SUCCESS('Signature is valid'))
                else:
                    raise CommandError('Signature does not match payload')
                return

            self.stdout.write(create_payout_signature(payload, key))
        except PayOSException as e:
            raise CommandError(e.message)
