import time
from django.conf import settings
from django.core.files.storage import FileSystemStorage
from django.utils.text import get_valid_filename
from .exceptions import StorageFailure
import logging

logger = logging.getLogger(__name__)

# Keeps the uploaded spreadsheet files on disk so they can be cleaned up when an upload is deleted
class FileTransport:
    def __init__(self, location=None):
        self.location = location or settings.UPLOAD_ROOT
        self.storage = FileSystemStorage(location=self.location)

    def store(self, file):
        """
        Stores an uploaded file and returns its stored filename.

        The stored name is '<milliseconds>-<sanitized original name>'. The storage
        picks a different name if that one is already taken.
        """
        file.seek(0)
        name = f"{int(time.time() * 1000)}-{get_valid_filename(file.name)}"
        try:
            stored_filename = self.storage.save(name, file)
        except OSError as e:
            logger.error("Failed to store upload %s: %s", file.name, e)
            raise StorageFailure("Upload storage is unavailable") from e
        logger.info("Stored upload %s as %s", file.name, stored_filename)
        return stored_filename

    def remove(self, stored_filename):
        """
        Removes a stored file. Failures are logged and never raised.

        Returns True if the file was removed.
        """
        try:
            self.storage.delete(stored_filename)
            return True
        except Exception as e:
            logger.warning("Could not remove stored file %s: %s", stored_filename, e)
            return False
