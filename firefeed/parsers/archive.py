"""
KMZ archive extraction.

A KMZ file is a ZIP archive holding one KML document (usually doc.kml).
"""

import io
import zipfile

from loguru import logger


class ArchiveError(Exception):
    """Raised when an archive cannot be read or holds no markup document."""
    pass


def extract_markup(data: bytes, suffix: str = ".kml", encoding: str = "utf-8") -> str:
    """
    Extract the first entry ending in suffix and decode it.

    Args:
        data: Compressed archive bytes
        suffix: File extension of the wanted entry
        encoding: Text encoding of the entry

    Returns:
        Decoded document text

    Raises:
        ArchiveError: If the bytes are not a ZIP archive or no entry matches
    """
    try:
        with zipfile.ZipFile(io.BytesIO(data), "r") as zf:
            names = [n for n in zf.namelist() if n.lower().endswith(suffix)]
            if not names:
                raise ArchiveError(f"No {suffix} entry found in archive")

            if len(names) > 1:
                logger.debug(f"Archive holds {len(names)} {suffix} entries, using {names[0]}")

            content = zf.read(names[0])
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Not a valid archive: {e}") from e

    try:
        return content.decode(encoding)
    except UnicodeDecodeError as e:
        raise ArchiveError(f"Could not decode {names[0]} as {encoding}") from e
