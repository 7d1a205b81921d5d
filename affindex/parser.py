"""
.. autoclass:: AffParser
    :members:

Internal helpers
^^^^^^^^^^^^^^^^

.. autofunction:: read_directive
"""

from __future__ import annotations

import logging
import re
import string
import zipfile
from types import MappingProxyType
from typing import IO, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from affindex.readers.file_reader import BaseReader, FileReader, ZipReader


LOGGER = logging.getLogger(__name__)

# Only ASCII whitespace counts, whatever the locale or the Unicode database thinks
SPACE = ' \t\n\v\f\r'
DIRECTIVE_REGEXP = re.compile(rf'[{SPACE}]*(?P<name>[^{SPACE}]+)[{SPACE}]*(?P<parameters>.*)', re.DOTALL)

# str.upper() would turn 'ß' into 'SS' and 'ﬁ' into 'FI'; directive names only get a-z uppercased
UPCASE = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def read_directive(line: str) -> Optional[Tuple[str, Optional[str]]]:
    """
    Splits one line (without line terminator) into ``(NAME, parameters)``.

    Returns ``None`` for insignificant lines: empty, consisting only of spaces, or having ``#`` as
    their first non-space char. ``parameters`` is ``None`` when nothing follows the name, and
    verbatim rest of the line otherwise, so ``#`` there is just a part of the parameters::

        >>> read_directive('  sfx A Y 2')
        ('SFX', 'A Y 2')
        >>> read_directive('LANG hu_HU # not a comment')
        ('LANG', 'hu_HU # not a comment')
        >>> read_directive('COMPLEXPREFIXES  ')
        ('COMPLEXPREFIXES', None)
        >>> read_directive('  # comment') is None
        True
    """

    match = DIRECTIVE_REGEXP.match(line)
    if not match or match.group('name').startswith('#'):
        return None

    return (match.group('name').translate(UPCASE), match.group('parameters') or None)


class AffParser:
    """
    Low-level parser of ``*.aff`` file: it doesn't know what any directive means, just collects
    all of them. Each significant line of the file is ``DIRECTIVE [parameters]``, and the same
    directive can (and, for affixes and tables, does) appear many times, so for each directive
    the parser stores the list of parameter lines in the order they were in the file.

    Directive names are stored uppercase (``sfx`` and ``SFX`` is the same directive), parameters
    are stored as is. So, this:

    .. code-block:: text

        SFX A Y 2
        SFX A abc qwe .
        # comment
        sfx A zxc abc .

    is stored as ``{'SFX': ['A Y 2', 'A abc qwe .', 'A zxc abc .']}``.

    Usage::

        parser = AffParser()
        with open('en_US.aff', encoding='UTF-8') as file:
            parser.parse(file)

        parser.is_command_present('COMPLEXPREFIXES')
        # => False
        parser.get_command_parameters('SET')
        # => ('UTF-8',)

    Every :meth:`parse` call adds to what previous calls have read; call :meth:`clear` to start
    over. The parser isn't thread-safe: ``parse`` and ``clear`` shouldn't run concurrently with
    anything else on the same instance.

    **Creation**

    .. automethod:: from_file
    .. automethod:: from_zip

    **Reading**

    .. automethod:: parse
    .. automethod:: clear

    **Querying**

    .. automethod:: is_command_present
    .. automethod:: get_command_parameters
    .. automethod:: data
    """

    @classmethod
    def from_file(cls, path: str, encoding: str = 'Windows-1252') -> AffParser:
        """
        Read ``*.aff`` file from the filesystem.

        Args:
            path: Full path to the file, like ``/usr/share/hunspell/en_US.aff``
            encoding: Encoding to decode the file with; bytes that can't be decoded are preserved
                      as surrogates

        Raises:
            ValueError: If the file was opened, but reading it failed midway
        """

        parser = cls()
        with FileReader(path, encoding=encoding) as reader:
            if not parser.parse(reader):
                raise ValueError(f'Failed to read {path}')

        return parser

    # .oxt, .xpi
    @classmethod
    def from_zip(cls, path: str, encoding: str = 'Windows-1252') -> AffParser:
        """
        Read ``*.aff`` file from zip-archive (Open/Libre Office and Firefox dictionary extensions
        are such archives). If there are several ``*.aff`` files inside, the first one is read.

        Args:
            path: Path to zip-file/extension.
            encoding: See :meth:`from_file`

        Raises:
            LookupError: If there is no ``*.aff`` file in the archive
            ValueError: If reading failed midway
        """

        with zipfile.ZipFile(path) as file:
            aff_pathes = [name for name in file.namelist() if name.endswith('.aff')]
            if not aff_pathes:
                raise LookupError(f'*.aff not found in {path}')

            parser = cls()
            with ZipReader(file.open(aff_pathes[0]), encoding=encoding) as reader:
                if not parser.parse(reader):
                    raise ValueError(f'Failed to read {aff_pathes[0]} from {path}')

        return parser

    def __init__(self):
        self._table: Dict[str, List[str]] = {}

    def clear(self):
        """
        Forget everything read so far.
        """

        self._table.clear()

    def parse(self, stream: Union[IO[str], BaseReader]) -> bool:
        """
        Reads the stream to its end, adding every directive found to what was already read.

        If reading fails midway (reading a line raises ``OSError`` or ``ValueError``, like for
        undecodable bytes or a closed file), there is no way to tell what was left unread, so the
        parser drops **everything**, including the results of previous successful calls, and
        returns ``False``. Errors that are not about reading aren't caught.

        Lines of a stream are taken as they are (a BOM is only dropped by readers that decode the
        file themselves, like :class:`FileReader <affindex.readers.file_reader.FileReader>`).

        Args:
            stream: Text stream (anything with ``readline()``: opened file, ``io.StringIO``, ...) or
                    one of :mod:`readers <affindex.readers.file_reader>`

        Returns:
            ``True`` when the stream was read to the end (even if it had no directives at all),
            ``False`` on read failure
        """

        reader = stream if isinstance(stream, BaseReader) else BaseReader(stream)
        start_line = reader.line_no

        while True:
            try:
                line = reader.readline()
            except (OSError, ValueError) as e:
                LOGGER.warning('Reading failed after line %d (%s), dropping all directives read', reader.line_no, e)
                self.clear()
                return False

            if line is None:
                break

            directive = read_directive(line)
            if not directive:
                continue

            name, parameters = directive
            lines = self._table.setdefault(name, [])
            if parameters is not None:
                lines.append(parameters)

        LOGGER.debug('Read %d lines, %d directives known', reader.line_no - start_line, len(self._table))
        return True

    def is_command_present(self, command: str) -> bool:
        """
        Checks if the directive was present in what was read, even without parameters.

        Args:
            command: Directive name, all uppercase (it is not normalized)
        """

        return command in self._table

    def get_command_parameters(self, command: str) -> Tuple[str, ...]:
        """
        All parameter lines of the directive, in order of reading. Empty if the directive wasn't
        present, and also if it was, but always without parameters: use :meth:`is_command_present`
        to tell one from another.

        The result is a copy: it stays the same after subsequent :meth:`parse` or :meth:`clear`.

        Args:
            command: Directive name, all uppercase (it is not normalized)
        """

        return tuple(self._table.get(command, ()))

    def data(self) -> Mapping[str, List[str]]:
        """
        Everything read, as a read-only mapping ``NAME => [parameter lines]``.

        Note that it is a *view*: it changes with subsequent :meth:`parse` and becomes empty after
        :meth:`clear` (or failed ``parse``). Copy it if you need a snapshot. Lists inside shouldn't be
        changed.
        """

        return MappingProxyType(self._table)

    def __contains__(self, command: str) -> bool:
        return self.is_command_present(command)

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self):
        return f"AffParser({', '.join(self._table)})"
