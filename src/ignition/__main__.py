"""Run the application with the default literal configuration: python -m ignition"""

import asyncio

from ignition.application import run_application
from ignition.config import DEFAULT_APP_CONFIG


if __name__ == "__main__":
    asyncio.run(run_application(DEFAULT_APP_CONFIG))
