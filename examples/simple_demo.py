#!/usr/bin/env python3
"""
IronMQ Client Demo

This script pushes a message on a queue, pulls it back and deletes it.
Credentials come from a config file given as first argument, or from
iron.json / IRON_TOKEN and IRON_PROJECT_ID.
"""

import json
import sys
import time
from typing import Optional

from ironmq import NO_MESSAGES, IronMQClient, IronMQError, setup_logging


def demo_round_trip(config_file: Optional[str] = None) -> None:
    """Push, pull and delete one message on ``test_queue``."""
    print("🚀 IronMQ Client Demo")
    print("=" * 50)

    with IronMQClient(config_file) as ironmq:
        print("\n📤 Posting message...")
        result = ironmq.post_message("test_queue", {"body": "Test Message"})
        print(json.dumps(result, indent=2))

        time.sleep(2)

        print("\n📥 Getting message...")
        message = ironmq.get_message("test_queue")
        if message is NO_MESSAGES:
            print("Queue is empty")
            return
        print(json.dumps(message, indent=2))

        print("\n🗑️  Deleting message...")
        print(json.dumps(ironmq.delete_message("test_queue", message["id"]), indent=2))


def main() -> int:
    setup_logging(level="DEBUG", json_output=False)
    try:
        demo_round_trip(sys.argv[1] if len(sys.argv) > 1 else None)
    except IronMQError as e:
        print(f"❌ {type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
