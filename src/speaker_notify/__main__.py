"""Allow running the action with ``python -m speaker_notify``."""

import sys

from speaker_notify.action import main

sys.exit(main())
