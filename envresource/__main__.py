"""
Run one provisioning cycle from the command line, configured by ENVRESOURCE_* variables.
Example: ENVRESOURCE_ENVIRONMENT=production ENVRESOURCE_BUILD_PATH=. python -m envresource
Prints the loaded env file (empty line if nothing was loaded); exits 1 on failure.
"""

import asyncio
import logging
import sys

from envresource.config import get_settings
from envresource.errors import ProvisioningError
from envresource.logging_setup import setup_logging
from envresource.resource import EnvVars
from envresource.runtime import LocalFactory

log = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()
    setup_logging(settings)
    factory = LocalFactory(settings.build_path, settings.storage_path, settings.environment)
    log.info("Provisioning env vars (%s)", settings.environment.value)
    try:
        env_path = asyncio.run(EnvVars().provision(factory))
    except ProvisioningError as e:
        log.error("Provisioning failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(env_path or "")
    return 0


if __name__ == "__main__":
    sys.exit(main())
