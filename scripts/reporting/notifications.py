"""
Slack alert for new red tag submissions.

Builds the webhook message announcing a submission and posts it. Delivery is
best effort: failures are reported as warnings and never block the
submission itself.
"""

import json
import sys
import urllib.error
import urllib.request
from typing import Any, Dict, Optional

from records.schema import SubmissionRecord


ALERT_TEXT = "🚨 RED TAG Alert - New Form Submitted"
ALERT_COLOR = "#1976d2"


def build_slack_message(record: SubmissionRecord) -> Dict[str, Any]:
    """
    Build the Slack webhook payload for a submission.

    Args:
        record: Newly stored record

    Returns:
        Slack message dictionary
    """
    fields = [
        ("MFC", record.mfc),
        ("Part Number", record.part_number),
        ("Asset SN", record.removed_from),
        ("Reason", record.reason_remove),
        ("Tagged By", record.tagged_by),
        ("Date", record.effective_date),
    ]
    return {
        "text": ALERT_TEXT,
        "attachments": [{
            "color": ALERT_COLOR,
            "fields": [
                {"title": title, "value": value or "", "short": True}
                for title, value in fields
            ],
        }],
    }


def send_slack_message(
    record: SubmissionRecord,
    webhook_url: Optional[str],
    timeout: float = 10,
) -> bool:
    """
    Post the submission alert to a Slack webhook.

    Args:
        record: Newly stored record
        webhook_url: Incoming webhook URL; nothing is sent when empty
        timeout: Request timeout in seconds

    Returns:
        True if the webhook accepted the message
    """
    if not webhook_url:
        return False

    data = json.dumps(build_slack_message(record)).encode('utf-8')
    req = urllib.request.Request(
        webhook_url,
        data=data,
        headers={'Content-Type': 'application/json'},
    )

    try:
        with urllib.request.urlopen(req, timeout=timeout) as response:
            status = getattr(response, 'status', 200)
    except (urllib.error.URLError, OSError, ValueError) as e:
        print(f"Warning: Slack notification failed: {e}", file=sys.stderr)
        return False

    if not 200 <= status < 300:
        print(f"Warning: Slack notification failed with HTTP {status}", file=sys.stderr)
        return False

    print("Slack notification sent", file=sys.stderr)
    return True
