import asyncio
import json
import logging
import os
import sys

from customerio import Request, CustomerIOError

log_request = logging.getLogger("customerio.request")
log_http = logging.getLogger("customerio.http")

for logger in (log_request, log_http):
    logger.addHandler(logging.StreamHandler())
    logger.setLevel(logging.DEBUG if os.environ.get("CUSTOMERIO_DEBUG") else logging.WARNING)

if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

USAGE = "usage: main.py METHOD URI [JSON]"


async def main(argv):
    if len(argv) < 2:
        print(USAGE, file=sys.stderr)
        return 2
    method, uri = argv[0].upper(), argv[1]
    defaults = {}
    try:
        data = json.loads(argv[2]) if len(argv) > 2 else None
        if os.environ.get("CUSTOMERIO_TIMEOUT"):
            defaults["timeout"] = int(os.environ["CUSTOMERIO_TIMEOUT"])
    except ValueError as e:
        print(f"{USAGE}\n{e}", file=sys.stderr)
        return 2
    req = Request(os.environ.get("CUSTOMERIO_SITE_ID"), os.environ.get("CUSTOMERIO_API_KEY"), defaults)

    calls = {
        "GET": lambda: req.get(uri, data),
        "PUT": lambda: req.put(uri, data),
        "POST": lambda: req.post(uri, data),
        "DELETE": lambda: req.destroy(uri),
    }
    if method not in calls:
        print(USAGE, file=sys.stderr)
        return 2

    try:
        result = await calls[method]()
    except CustomerIOError as e:
        print(e.message, file=sys.stderr)
        return 1
    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
