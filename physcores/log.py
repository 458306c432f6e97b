from __future__ import annotations

import logging

LOGGER_NAME = "physcores"

logger = logging.getLogger(LOGGER_NAME)
