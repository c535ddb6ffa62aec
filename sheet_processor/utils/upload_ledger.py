from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from sheet_processor.models import UploadEntry
from .dataset_store import DatasetStore
from .file_transport import FileTransport
from .exceptions import NotFound, StorageFailure
import logging

logger = logging.getLogger(__name__)

class UploadLedger:
    """
    Records one entry per upload: owner, filenames, upload time and the parsed dataset.

        def record(self, owner, stored_filename, original_filename, dataset_id) - Creates an entry.
        def list_for(self, owner) - The owner's entries, newest first.
        def get_for(self, owner, entry_id) - One of the owner's entries.
        def delete_one(self, owner, entry_id) - Deletes an entry, its dataset and its stored file.

    Every lookup is filtered by owner, so another user's entry behaves as if it did not exist.
    """
    def __init__(self, store=None, transport=None):
        self.store = store or DatasetStore()
        self.transport = transport or FileTransport()

    def record(self, owner, stored_filename, original_filename, dataset_id):
        try:
            entry = UploadEntry.objects.create(
                owner_id=owner,
                stored_filename=stored_filename,
                original_filename=original_filename,
                dataset_id=dataset_id,
            )
        except DatabaseError as e:
            logger.error("Failed to record upload %s for %s: %s", original_filename, owner, e)
            raise StorageFailure("Upload history is unavailable") from e
        logger.info("%s: Upload %s recorded for user %s", entry.pk, original_filename, owner)
        return entry

    def list_for(self, owner):
        try:
            return list(UploadEntry.objects.filter(owner=owner).select_related('dataset').order_by('-uploaded_at', '-id'))
        except DatabaseError as e:
            logger.error("Failed to list uploads for %s: %s", owner, e)
            raise StorageFailure("Upload history is unavailable") from e

    def get_for(self, owner, entry_id):
        try:
            return UploadEntry.objects.select_related('dataset').get(pk=entry_id, owner=owner)
        except (UploadEntry.DoesNotExist, ValidationError, ValueError):
            raise NotFound("Upload not found")
        except DatabaseError as e:
            logger.error("Failed to read upload %s: %s", entry_id, e)
            raise StorageFailure("Upload history is unavailable") from e

    def delete_one(self, owner, entry_id):
        """
        Deletes one of the owner's uploads.

        The dataset is dropped first and the entry goes with it in the same transaction.
        The stored file is removed afterwards; a failure to remove it is only logged.

        Returns:
            The id of the deleted entry.

        Raises:
            NotFound: The entry does not exist or belongs to another user.
        """
        try:
            with transaction.atomic():
                entry = self.get_for(owner, entry_id)
                deleted_id, stored_filename = entry.pk, entry.stored_filename
                # Cascades to the upload entry
                self.store.drop(entry.dataset_id)
        except DatabaseError as e:
            logger.error("Failed to delete upload %s: %s", entry_id, e)
            raise StorageFailure("Upload history is unavailable") from e

        if not self.transport.remove(stored_filename):
            logger.warning("%s: Upload deleted but its stored file %s remains", entry_id, stored_filename)
        logger.info("%s: Upload deleted by user %s", entry_id, owner)
        return deleted_id
