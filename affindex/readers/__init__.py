from .file_reader import BaseReader, FileReader, ZipReader

__all__ = [
    "BaseReader",
    "FileReader",
    "ZipReader"
]
