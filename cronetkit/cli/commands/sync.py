"""
Sync command implementation.

Downloads the Chromium components cronet needs into the naiveproxy tree.
"""

import logging

from cronetkit.cli.utils import load_context
from cronetkit.sync import ComponentSync

logger = logging.getLogger(__name__)


def run(args) -> int:
    """Run the sync command."""
    ComponentSync(load_context(args)).sync()
    return 0
