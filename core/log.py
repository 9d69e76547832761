from __future__ import annotations

import logging
import os

ENV_LOG_LEVEL = "FLEX_ERP_LOG_LEVEL"


def configure_logging() -> None:
    level_name = os.getenv(ENV_LOG_LEVEL, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    # Streamlit reruns app.py on every interaction; only attach handlers once.
    root = logging.getLogger("core")
    if root.handlers:
        root.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
