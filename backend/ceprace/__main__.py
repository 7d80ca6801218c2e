from __future__ import annotations

import sys

from ceprace.cli import main


sys.exit(main())
