#!/usr/bin/env python3
"""
CLI tool for logging a red tag submission.

Validates the required fields, appends the record to the records log and,
when a webhook is configured, posts the Slack alert.

Usage:
    python3 scripts/log_redtag.py --mfc HLN01 --tagged-by "J. Doe" \\
        --item-type Motor --part-number MOT-001 --removed-from LR0000 \\
        --reason Defected --comments "ok, replaced"
"""

import argparse
import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from metrics.config import config
from records.schema import SubmissionError, default_date
from records.store import RecordStore
from reporting.notifications import send_slack_message


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Log a red tag equipment removal",
    )

    parser.add_argument("--records", type=str, metavar="PATH",
                        help="Path to the records log (default: records.log_path from config)")
    parser.add_argument("--mfc", help="Site / MFC code")
    parser.add_argument("--removal-date", default=default_date(),
                        help="Removal date, YYYY-MM-DD (default: today)")
    parser.add_argument("--tagged-by", help="Name of the person tagging the item")
    parser.add_argument("--item-type", help="Type of item removed")
    parser.add_argument("--part-number", help="Part number")
    parser.add_argument("--removed-from", help="Asset serial number the part came from")
    parser.add_argument("--service-call-id", help="Service call ID (optional)")
    parser.add_argument("--reason", help="Reason for removal")
    parser.add_argument("--comments", help="Free-text comments (optional)")
    parser.add_argument("--attach", action="append", default=[], metavar="FILE",
                        help="Name of an attached file (repeatable)")
    parser.add_argument("--no-notify", action="store_true",
                        help="Do not post the Slack alert")

    args = parser.parse_args(argv)

    data = {
        "mfc": args.mfc,
        "removalDate": args.removal_date,
        "taggedBy": args.tagged_by,
        "itemType": args.item_type,
        "partNumber": args.part_number,
        "removedFrom": args.removed_from,
        "serviceCallId": args.service_call_id,
        "reasonRemove": args.reason,
        "comments": args.comments,
    }

    records_path = Path(args.records) if args.records else config.get_path("records.log_path")

    try:
        store = RecordStore.load(records_path, missing_ok=True)
        record = store.submit(data, attached_files=[Path(name).name for name in args.attach])
    except SubmissionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Error: Failed to save record to {records_path}: {e}", file=sys.stderr)
        return 1

    print(json.dumps(record.to_dict(), ensure_ascii=False))
    print(f"Record {record.id} saved to: {records_path}", file=sys.stderr)

    if config.is_enabled("notifications") and not args.no_notify:
        send_slack_message(
            record,
            config.get("notifications.slack_webhook_url"),
            timeout=config.get("notifications.timeout_sec", 10),
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
