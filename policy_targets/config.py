#
#  config.py
#

"""
Environment variables and settings that control how the REN21 step is run. Values can be set in the environment or
in a `.env` file (see `ENV_FILE`).
"""
from os import environ as env
from pathlib import Path

import pandas as pd
import structlog
from dotenv import load_dotenv

from policy_targets.paths import BASE_DIR

log = structlog.get_logger()

ENV_FILE = Path(env.get("ENV_FILE", BASE_DIR / ".env"))


def load_env():
    if env.get("ENV", "").startswith("."):
        raise ValueError(f"ENV was replaced by ENV_FILE, please use ENV_FILE={env['ENV']} ... instead.")

    load_dotenv(ENV_FILE)


def _as_bool(value: str | None) -> bool:
    return value in ("True", "true", "1")


load_env()


pd.set_option("future.no_silent_downcasting", True)

# When DEBUG is on
# - log the intermediate tables of the capacity conversion
DEBUG = _as_bool(env.get("DEBUG"))

# Environment, e.g. production, staging, dev
ENV = env.get("ENV", "dev")

# If True, labels in the input tables that the conversion does not know about raise an exception instead of
# being logged and dropped.
STRICT = _as_bool(env.get("STRICT"))

# Subtypes to produce when running the step.
SUBTYPES = [subtype.strip() for subtype in env.get("REN21_SUBTYPES", "Capacity,investmentCosts").split(",")]
