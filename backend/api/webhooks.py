"""
Payment-provider webhooks (Stripe)

Only `checkout.session.completed` is acted on, and only by logging the
company passed as client_reference_id at checkout. Events are always
acknowledged once parsed so Stripe does not retry them.
"""

import json
import logging

import stripe
from fastapi import APIRouter, HTTPException, Request, status

from config import get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/webhooks", tags=["webhooks"])


def _parse_event(payload: bytes, signature: str):
    """
    Parse (and, when a signing secret is configured, verify) an event.

    Any JSON value is returned; the caller decides what it can handle.

    Raises:
        HTTPException 400 on a malformed payload or bad signature
    """
    secret = get_settings().stripe_webhook_secret

    if secret:
        try:
            stripe.Webhook.construct_event(payload, signature, secret)
        except ValueError as e:
            logger.error(f"Invalid webhook payload: {e}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid payload")
        except stripe.SignatureVerificationError as e:
            logger.error(f"Invalid webhook signature: {e}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid signature")

    try:
        event = json.loads(payload or b"{}")
    except ValueError as e:
        logger.error(f"Invalid webhook payload: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid payload")
    return event


def handle_checkout_completed(session: dict):
    """Payment succeeded for the company passed as client_reference_id"""
    company_id = session.get("client_reference_id")
    logger.info(f"[Stripe] Payment success for Company {company_id}")
    # TODO: activate the company's subscription once a subscriptions table
    # exists (status ACTIVE, plan from the checkout session's price).


@router.post("/stripe")
async def stripe_webhook(request: Request):
    """Receive a Stripe event envelope"""
    payload = await request.body()
    event = _parse_event(payload, request.headers.get("stripe-signature", ""))
    if not isinstance(event, dict):
        logger.info(f"Unhandled webhook body: {payload[:200]!r}")
        return {"received": True}

    event_type = event.get("type")

    try:
        if event_type == "checkout.session.completed":
            session = (event.get("data") or {}).get("object") or {}
            handle_checkout_completed(session)
        else:
            logger.info(f"Unhandled webhook event type: {event_type}")
    except Exception as e:
        # Still acknowledge to prevent Stripe from retrying
        logger.error(f"Error processing webhook event {event_type}: {e}")

    return {"received": True}
