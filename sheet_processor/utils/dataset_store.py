from django.core.exceptions import ValidationError
from django.db import DatabaseError
from sheet_processor.models import Dataset
from .dataset_parser import ParsedDataset
from .exceptions import NotFound, StorageFailure
import logging

logger = logging.getLogger(__name__)

# Stores parsed datasets as write-once records
class DatasetStore:
    """
    Append-only store for parsed datasets.

        def save(self, dataset) - Stores a dataset and returns its new id.
        def get(self, dataset_id) - Returns the stored dataset.
        def drop(self, dataset_id) - Removes a dataset and, by cascade, its upload entry.
    There is no update operation.
    """

    def save(self, dataset: ParsedDataset):
        data = dataset.to_json_object()
        try:
            record = Dataset.objects.create(columns=data['columns'], rows=data['rows'])
        except DatabaseError as e:
            logger.error("Failed to save dataset: %s", e)
            raise StorageFailure("Dataset storage is unavailable") from e
        logger.info("%s: Dataset saved with %d rows", record.dataset_id, len(data['rows']))
        return record.dataset_id

    def get(self, dataset_id):
        try:
            record = Dataset.objects.get(pk=dataset_id)
        except (Dataset.DoesNotExist, ValidationError, ValueError):
            raise NotFound(f"Dataset not found {dataset_id}")
        except DatabaseError as e:
            logger.error("Failed to read dataset %s: %s", dataset_id, e)
            raise StorageFailure("Dataset storage is unavailable") from e
        return ParsedDataset(record.columns, record.rows)

    def drop(self, dataset_id):
        try:
            deleted, _ = Dataset.objects.filter(pk=dataset_id).delete()
        except DatabaseError as e:
            logger.error("Failed to drop dataset %s: %s", dataset_id, e)
            raise StorageFailure("Dataset storage is unavailable") from e
        if not deleted:
            raise NotFound(f"Dataset not found {dataset_id}")
        logger.info("%s: Dataset dropped", dataset_id)
