"""Deployment environment for the API, the seed script and the helpers.

Import this before anything that reads settings: it loads ``.env`` into the
process environment. Variables already set in the environment win over the
file, so hosted deployments configure everything directly.

    ENVIRONMENT   'development' (default) or 'production'
"""

import os
import logging
from dotenv import load_dotenv

load_dotenv()

ENVIRONMENTS = ('development', 'production')

ENVIRONMENT_NAME = os.environ.get('ENVIRONMENT', '').strip().lower()
if ENVIRONMENT_NAME not in ENVIRONMENTS:
    logging.warning(
        f"ENVIRONMENT={ENVIRONMENT_NAME!r} is not one of {', '.join(ENVIRONMENTS)}; "
        "running as development"
    )
    ENVIRONMENT_NAME = 'development'

IS_PRODUCTION_ENVIRONMENT = ENVIRONMENT_NAME == 'production'

__all__ = ['ENVIRONMENT_NAME', 'IS_PRODUCTION_ENVIRONMENT']
