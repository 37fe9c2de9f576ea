"""
Signals for PayOS callback events.
"""
from django.dispatch import Signal

# Sent when a valid payment callback arrives
# Provides arguments:
# - data: WebhookData parsed from the body
# - payload: The raw JSON body
payment_webhook_received = Signal()

# Sent when a payout callback passes signature verification
# Provides arguments:
# - payload: The raw JSON body
payout_webhook_received = Signal()
