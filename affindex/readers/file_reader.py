"""
.. autoclass:: BaseReader
    :members:

.. autoclass:: FileReader
.. autoclass:: ZipReader
"""

import io
from typing import IO, Iterator, Optional, Tuple


BOM = '\ufeff'


class BaseReader:
    """
    Common base for :class:`FileReader` and :class:`ZipReader`. In fact, it is a very thin wrapper
    around ``IO``-alike object, to read it line by line and:

    * remove line terminators (``\\n``, ``\\r\\n`` or ``\\r``), but nothing else: unlike most
      readers, leading and trailing spaces are left for the parser to deal with
    * for files it opens and decodes itself (:class:`FileReader`, :class:`ZipReader`), ignore BOM
      (byte-order mark) at the beginning; lines of an already decoded stream are left as they are
    * count lines (1-based), so failures can be reported with a line number

    Any object with ``readline()`` works as ``obj``, including ``io.StringIO``::

        reader = BaseReader(io.StringIO("SET UTF-8\\nTRY abc\\n"))
        for line_no, line in reader:
            print(line_no, line)
        # 1 SET UTF-8
        # 2 TRY abc

    Errors raised by the underlying object (``OSError``, ``UnicodeDecodeError``, ``ValueError`` of a
    closed file) are not handled
    here.
    """

    #: Whether U+FEFF at the very beginning of the stream is dropped
    skip_bom = False

    def __init__(self, obj: IO[str]):
        self.line_no = 0
        self.io = obj

    def readline(self) -> Optional[str]:
        """
        Returns next line without its terminator, or ``None`` when the stream is exhausted. Note
        that an empty line in the middle of the stream is ``''``, not ``None``.
        """

        ln = self.io.readline()
        if ln == '':
            return None

        self.line_no += 1
        if self.skip_bom and self.line_no == 1 and ln.startswith(BOM):
            ln = ln[len(BOM):]

        if ln.endswith('\r\n'):
            return ln[:-2]
        if ln.endswith(('\n', '\r')):
            return ln[:-1]
        return ln

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        ln = self.readline()
        while ln is not None:
            yield (self.line_no, ln)
            ln = self.readline()

    def close(self):
        self.io.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()


class FileReader(BaseReader):
    """
    Reader implementation for simple filesystem file.
    """

    skip_bom = True

    def __init__(self, path, encoding='Windows-1252'):
        self.path = path
        super().__init__(self._open(path, encoding))

    def _open(self, path, encoding):  # pylint: disable=no-self-use
        # errors='surrogateescape', because real-world dictionaries (hu_HU of LibreOffice, for one)
        # carry bytes invalid in their declared encoding as affix flags
        return open(path, 'r', encoding=encoding, errors='surrogateescape', newline='')


class ZipReader(BaseReader):
    """
    Reader implementation for file inside zip archive (``zipfile.ZipFile.open(...)`` result).
    """

    skip_bom = True

    def __init__(self, zip_obj, encoding='Windows-1252'):
        self.name = zip_obj.name
        super().__init__(self._open(zip_obj, encoding))

    def _open(self, zip_obj, encoding):  # pylint: disable=no-self-use
        return io.TextIOWrapper(zip_obj, encoding=encoding, errors='surrogateescape', newline='')
