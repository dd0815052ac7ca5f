"""
Publish command implementation.
"""

import logging

from cronetkit.cli.utils import load_context
from cronetkit.publish.publisher import Publisher

logger = logging.getLogger(__name__)


def run(args) -> int:
    """Run the publish command."""
    Publisher(load_context(args)).publish()
    return 0
