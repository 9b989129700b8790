import html
import logging

import requests

from config import CONTACT_NOTIFY_EMAIL, EMAIL_FROM, HTTP_TIMEOUT, RESEND_API_KEY, SITE_OWNER_NAME

logger = logging.getLogger(__name__)

RESEND_URL = "https://api.resend.com/emails"


def send_contact_notification(name: str, email: str, message: str, to_name: str = None) -> bool:
    """Email the site owner about a new contact message. Never raises."""
    if not RESEND_API_KEY or not CONTACT_NOTIFY_EMAIL:
        logger.warning("Resend configuration missing, skipping contact notification")
        return False

    headers = {
        "Authorization": f"Bearer {RESEND_API_KEY}",
        "Content-Type": "application/json"
    }

    name, message = html.escape(name), html.escape(message)

    data = {
        "from": EMAIL_FROM,
        "to": [CONTACT_NOTIFY_EMAIL],
        "reply_to": email,
        "subject": f"New message from {name}",
        "html": f"""
            <div style='font-family:Arial,sans-serif;padding:1rem;background:#f9f9f9;border-radius:10px'>
                <h2>Hi {to_name or SITE_OWNER_NAME},</h2>
                <p>You have a new message from <strong>{name}</strong> ({html.escape(email)}):</p>
                <p style='white-space:pre-wrap'>{message}</p>
            </div>
        """
    }

    try:
        response = requests.post(RESEND_URL, headers=headers, json=data, timeout=HTTP_TIMEOUT)
    except requests.RequestException as exc:
        logger.error("Resend error: %s", exc)
        return False

    if response.status_code != 200:
        logger.error("Resend answered %s: %s", response.status_code, response.text)
        return False
    return True
