# src/zipfiles/core/reader.py
import logging

from zipfiles.errors import ReadError
from zipfiles.models import FileRecord

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
COMMENT_PREFIX = "// "

class ContentReader:
    """Reads one file as text and formats it as a block of the combined output."""

    def read_text(self, record: FileRecord) -> str:
        try:
            raw = record.absolute_path.read_bytes()
        except OSError as e:
            raise ReadError(record.absolute_path, e.strerror or str(e)) from e
        # utf-8-sig drops a leading BOM; undecodable bytes become U+FFFD
        return raw.decode("utf-8-sig", errors="replace")

    def read(self, record: FileRecord, annotate: bool) -> str:
        logger.debug("Reading file: %s", record.absolute_path)
        content = self.read_text(record).strip()
        if annotate:
            return f"{COMMENT_PREFIX}{record.relative_path}\n{content}\n\n"
        return f"{content}\n\n"

def read_file(record: FileRecord, annotate: bool) -> str:
    return ContentReader().read(record, annotate)
