"""Run the Dev Events API with uvicorn.

HOST and PORT set the bind address; WEB_CONCURRENCY sets the number of
production workers.
"""

import os

import uvicorn

from devevents.config.environment import IS_PRODUCTION_ENVIRONMENT

APP_PATH = "devevents.api.app:app"

def run() -> None:
    host = os.environ.get('HOST', '0.0.0.0')
    port = int(os.environ.get('PORT', '8000'))

    if IS_PRODUCTION_ENVIRONMENT:
        uvicorn.run(
            APP_PATH,
            host=host,
            port=port,
            workers=int(os.environ.get('WEB_CONCURRENCY', '4')),
            log_level="info",
            proxy_headers=True,
            forwarded_allow_ips="*"
        )
    else:
        # Reload watches the package sources; it needs the import string too
        uvicorn.run(APP_PATH, host=host, port=port, reload=True, log_level="debug")

if __name__ == "__main__":
    run()
