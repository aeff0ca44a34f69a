"""
Notifications — Slack webhook post after each collection run.

Notification failure never blocks the console.
"""
import logging
import requests

from mission_control.config import SLACK_WEBHOOK_URL

logger = logging.getLogger('services.notifications')


def notify_collection_complete(result, webhook_url=None):
    """Post a collection summary to Slack."""
    webhook_url = webhook_url or SLACK_WEBHOOK_URL
    if not webhook_url:
        return

    try:
        blocks = [
            {
                "type": "header",
                "text": {
                    "type": "plain_text",
                    "text": f"Lead Collection Finished — {result.platform.capitalize()}",
                }
            },
            {
                "type": "section",
                "fields": [
                    {"type": "mrkdwn", "text": f"*Platform:* {result.platform}"},
                    {"type": "mrkdwn", "text": f"*New leads:* {result.leads_saved}"},
                ]
            },
        ]
        if result.leads_saved:
            blocks.append({
                "type": "context",
                "elements": [{"type": "mrkdwn", "text": "New leads are waiting for review in the console."}]
            })

        requests.post(webhook_url, json={"blocks": blocks}, timeout=10)
        logger.info("Collection notification sent", extra={'platform': result.platform})

    except Exception:
        logger.error("Failed to send collection notification for %s", result.platform, exc_info=True)
