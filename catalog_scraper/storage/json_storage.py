"""JSON batch storage.

A batch is written once, at the end of a run, as a pretty-printed JSON array
under ``{output_dir}/{project_name}/YYYY-MM-DD--HH_MM.json``. Files are never
updated in place; derived batches (converted prices) go to sibling files.
"""

import json
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union

import structlog
from pydantic import ValidationError

from catalog_scraper.core.exceptions import StorageError
from catalog_scraper.schemas.product import CatalogRecord, dump_record, parse_record

logger = structlog.get_logger(__name__)

PathLike = Union[str, Path]

TIMESTAMP_FORMAT = "%Y-%m-%d--%H_%M"
CONVERTED_SUFFIX = "-eur"


class BatchStorage:
    """Reads and writes catalog batches as JSON files."""

    def __init__(self, output_dir: PathLike, project_name: str):
        self.output_dir = Path(output_dir)
        self.project_name = project_name

    @property
    def project_dir(self) -> Path:
        return self.output_dir / self.project_name

    def batch_path(self, generated_at: Optional[datetime] = None) -> Path:
        """Storage key of a batch generated at the given local time."""
        generated_at = generated_at or datetime.now()
        return self.project_dir / f"{generated_at.strftime(TIMESTAMP_FORMAT)}.json"

    def save_batch(
        self,
        records: Sequence[CatalogRecord],
        generated_at: Optional[datetime] = None,
    ) -> Path:
        """Persist a run's records as a new timestamped batch file.

        Returns:
            Path of the written file
        """
        path = self.batch_path(generated_at)
        write_batch(path, records)
        return path

    @staticmethod
    def load_batch(path: PathLike) -> List[CatalogRecord]:
        """Read a batch file back into records.

        Raises:
            StorageError: If the file is missing, not JSON, or holds an
                item that is neither a product nor a failure record
        """
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise StorageError(str(path), f"cannot be read: {e}")
        except ValueError as e:
            raise StorageError(str(path), f"is not valid JSON: {e}")

        if not isinstance(raw, list):
            raise StorageError(str(path), "must contain a JSON array of records")

        records = []
        for index, item in enumerate(raw):
            if not isinstance(item, dict):
                raise StorageError(str(path), f"item {index} is not a JSON object")
            try:
                records.append(parse_record(item))
            except ValidationError as e:
                raise StorageError(str(path), f"item {index} is not a valid record: {e}")

        logger.info("batch_loaded", path=str(path), count=len(records))
        return records

    @staticmethod
    def converted_path(path: PathLike, suffix: str = CONVERTED_SUFFIX) -> Path:
        """Sibling path for a derived batch: ``a/b.json`` -> ``a/b-eur.json``."""
        path = Path(path)
        return path.with_name(f"{path.stem}{suffix}{path.suffix or '.json'}")


def write_batch(path: PathLike, records: Sequence[CatalogRecord]) -> Path:
    """Atomically write records as a 2-space indented JSON array.

    The content goes to a temporary file in the target directory first and is
    moved into place in one step, so a reader never sees a partial batch.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(
        [dump_record(record) for record in records],
        indent=2,
        ensure_ascii=False,
    )

    fd, tmp_name = tempfile.mkstemp(
        dir=str(path.parent), prefix=f".{path.stem}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info("batch_saved", path=str(path), count=len(records))
    return path
