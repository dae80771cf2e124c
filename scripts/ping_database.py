"""Keep the hosted database awake: one query over the async driver."""

import sys

from orgauth.keepalive import main

if __name__ == "__main__":
    sys.exit(main())
