"""
Integrity-checked HTTP downloads.

The response body is streamed to disk and into a SHA-256 accumulator at the
same time. A failed transfer never leaves a file behind at the destination
path, so later existence checks cannot mistake a corrupt download for a
provisioned artifact. There is no retry: the caller re-runs the pipeline.
"""

import hashlib
import logging
from pathlib import Path
from typing import Optional

import requests
from requests.exceptions import RequestException

from cronetkit.core.exceptions import ChecksumError, DownloadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class StreamingHasher:
    """Compute hash incrementally for streaming downloads."""

    def __init__(self, algorithm: str = "sha256"):
        """
        Initialize streaming hasher.

        Args:
            algorithm: Hash algorithm ('sha256' or 'sha512')

        Raises:
            ValueError: If algorithm is not supported
        """
        self.algorithm = algorithm.lower()

        if self.algorithm == "sha256":
            self.hasher = hashlib.sha256()
        elif self.algorithm == "sha512":
            self.hasher = hashlib.sha512()
        else:
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")

    def update(self, data: bytes):
        """Add data to hash computation."""
        self.hasher.update(data)

    def finalize(self) -> str:
        """Get final hash value as hex string."""
        return self.hasher.hexdigest()

    def verify(self, expected_hash: str) -> bool:
        """Check if computed hash matches expected value (case-insensitive)."""
        return self.finalize().lower() == expected_hash.lower()


def download_file(
    url: str,
    destination: Path,
    expected_sha256: Optional[str] = None,
    timeout: int = 60,
) -> Path:
    """
    Download file from URL to destination, verifying its SHA-256 digest.

    Args:
        url: URL to download from
        destination: Local path to save file
        expected_sha256: Expected SHA256 hash, checked once the body is read
        timeout: Connect/read timeout in seconds for the HTTP request

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: On transport failure or non-2xx HTTP status
        ChecksumError: If the digest does not match; the file is removed first
        ValueError: If URL or destination is empty

    Example:
        >>> download_file(
        ...     "https://example.com/sysroot.tar.xz",
        ...     Path("build/linux/sysroot.tar.xz"),
        ...     expected_sha256="5f1c...",
        ... )
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Downloading from {url}")

    hasher = StreamingHasher("sha256") if expected_sha256 else None

    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            if not 200 <= response.status_code < 300:
                raise DownloadError(
                    f"HTTP {response.status_code} while downloading {url}"
                )

            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        if hasher:
                            hasher.update(chunk)
    except RequestException as e:
        destination.unlink(missing_ok=True)
        raise DownloadError(f"Download of {url} failed: {e}") from e
    except DownloadError:
        destination.unlink(missing_ok=True)
        raise

    if hasher and not hasher.verify(expected_sha256):
        actual_hash = hasher.finalize()
        destination.unlink(missing_ok=True)
        raise ChecksumError(
            f"Checksum mismatch for {destination.name}: "
            f"expected {expected_sha256}, got {actual_hash}"
        )

    if hasher:
        logger.debug("Checksum verified successfully")

    logger.info(f"Download complete: {destination}")
    return destination


def verify_checksum(file_path: Path, expected_sha256: str) -> bool:
    """
    Verify file SHA256 checksum.

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    hasher = StreamingHasher("sha256")
    with open(file_path, "rb") as f:
        while chunk := f.read(CHUNK_SIZE):
            hasher.update(chunk)

    return hasher.verify(expected_sha256)
