"""Keep the hosted database awake: one query over the sync driver."""

import sys

from orgauth.keepalive import main_sync

if __name__ == "__main__":
    sys.exit(main_sync())
