"""
Backup Service - Handles export and import of the week data.

Architecture Decision: Why JSON for exports?
- Same shape the browser version stored, so its files keep importing
- Human-readable format for easy inspection and manual edits
- Cross-platform compatible
"""

import logging
from pathlib import Path
from typing import Optional

from internship_tracker.domain.exceptions import SnapshotImportError
from internship_tracker.domain.snapshot import weeks_to_json
from internship_tracker.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

EXPORT_INDENT = 2


class BackupService:
    """
    Writes the ledger's weeks to an export file and reads them back.

    Default file name: internship_hours_data.json
    """

    def __init__(self, ledger_service: LedgerService, export_dir: Optional[Path] = None):
        self.ledger_service = ledger_service
        self.export_dir = export_dir

    @property
    def export_filename(self) -> str:
        return self.ledger_service.preferences.export_filename

    def _resolve_destination(self, destination: Optional[Path]) -> Path:
        """Turn an optional file or directory into the export file path"""
        if destination is None:
            base = self.export_dir or Path.cwd()
            return Path(base) / self.export_filename

        destination = Path(destination)
        if destination.is_dir():
            return destination / self.export_filename
        return destination

    def export_to_file(self, destination: Optional[Path] = None) -> Path:
        """
        Export all weeks as pretty-printed JSON.

        Args:
            destination: Target file or directory; defaults to the export directory

        Returns:
            Path to the written file
        """
        export_file = self._resolve_destination(destination)
        export_file.parent.mkdir(parents=True, exist_ok=True)

        weeks = self.ledger_service.ledger.weeks
        with open(export_file, 'w', encoding='utf-8') as f:
            f.write(weeks_to_json(weeks, indent=EXPORT_INDENT))

        logger.info(f"Exported {len(weeks)} weeks to {export_file}")
        return export_file

    async def import_from_file(self, import_file: Path) -> int:
        """
        Replace all weeks with the contents of an export file.

        Args:
            import_file: Path to a JSON export

        Returns:
            Number of imported weeks

        Raises:
            FileNotFoundError: the file does not exist
            SnapshotImportError: the file is not a valid export; nothing was changed
        """
        import_file = Path(import_file)
        if not import_file.exists():
            raise FileNotFoundError(f"Import file not found: {import_file}")

        try:
            with open(import_file, 'r', encoding='utf-8') as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise SnapshotImportError("Invalid data file", "not UTF-8 text") from e

        weeks = await self.ledger_service.import_snapshot(content)
        logger.info(f"Imported {len(weeks)} weeks from {import_file}")
        return len(weeks)
