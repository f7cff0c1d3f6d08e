"""UG Finanzplan — liquidity, tax and BWA planning for a German UG."""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
