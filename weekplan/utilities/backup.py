"""
Backup utility for the planner storage file.
Used before the one-time legacy cleanup removes any persisted data.
"""
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class BackupManager:
    """Manages timestamped backups of a data file."""

    def __init__(self, data_dir: Path, backup_dir: Optional[Path] = None, keep: int = 10):
        self.data_dir = Path(data_dir)
        self.backup_dir = Path(backup_dir) if backup_dir else (self.data_dir / 'backups')
        self.keep = keep

    def create_backup(self, filename: str) -> bool:
        """Create a timestamped copy of ``filename``; False if it is missing or the copy fails."""
        source = self.data_dir / filename
        if not source.exists():
            logger.info("Nothing to back up, %s does not exist yet", filename)
            return False
        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            destination = self.backup_dir / f"{source.stem}_{timestamp}{source.suffix}"
            shutil.copy2(source, destination)
        except OSError as e:
            logger.error("Backup failed for %s: %s", filename, e)
            return False
        logger.info("Backup created: %s", destination.name)
        self._cleanup_old_backups(source.name)
        return True

    def _cleanup_old_backups(self, filename: str):
        """Remove old backups, keeping only the most recent ones."""
        pattern = f"{Path(filename).stem}_*{Path(filename).suffix}"
        backups = sorted(self.backup_dir.glob(pattern), key=lambda p: p.name)
        for backup in backups[:-self.keep]:
            try:
                backup.unlink()
                logger.info("Removed old backup: %s", backup.name)
            except OSError as e:
                logger.error("Failed to remove old backup %s: %s", backup.name, e)
