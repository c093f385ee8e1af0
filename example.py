"""Example: topic and content filtering with sync and async consumers."""

from dotenv import load_dotenv
load_dotenv()

import asyncio
import logging
import re

from msgbus import Publisher

logging.basicConfig(level=logging.INFO)


def main() -> None:
    publisher = Publisher.create("orders")
    emit = publisher.get_emitter()

    def audit(message: dict) -> None:
        print("audit:", message)

    async def notify(message: dict) -> None:
        await asyncio.sleep(0.01)
        print("notified:", message["order_id"])

    publisher.subscribe(audit)
    unsubscribe = publisher.subscribe(notify, re.compile(r"^order\.(placed|paid)$"))
    publisher.subscribe(
        lambda message: print("large order:", message["order_id"]),
        {"topic_pattern": "order.placed", "content_filter": lambda m: m["total"] > 100},
    )

    emit({"order_id": 1, "total": 20}, "user.signup")
    pending = emit({"order_id": 201, "total": 250}, "order.placed")
    if pending is not None:
        asyncio.run(pending)

    unsubscribe()
    unsubscribe()
    print("live subscriptions:", publisher.subscriptions_number)
    print("metrics:", publisher.metrics.snapshot())


if __name__ == "__main__":
    main()
