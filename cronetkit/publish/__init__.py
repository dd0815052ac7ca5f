"""
Publishing of the packaged module to the distribution branch.
"""

from cronetkit.publish.publisher import GitRepository, Publisher

__all__ = ["GitRepository", "Publisher"]
