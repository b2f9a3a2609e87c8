"""!
@brief Allow ``python -m version_info``.
"""
from __future__ import annotations

import sys

from .main import main

sys.exit(main())
