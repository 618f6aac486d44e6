from pathlib import Path

# Centralized paths for data files (single source of truth)
STORAGE_FILE_NAME = 'storage.json'


def storage_file_in(data_dir: Path) -> Path:
    """Storage file location inside ``data_dir``."""
    return Path(data_dir) / STORAGE_FILE_NAME


__all__ = ['STORAGE_FILE_NAME', 'storage_file_in']
