"""Locate and load ZDC session exports.

Three entry points, from the most to the least convenient:

- load_session(): scan a session directory for the export and bind it
- parse_session_file(): bind a known export file
- parse_session_string(): bind export content already in memory

All of them either return a complete ZdcSession or raise a ZdcError; there is
no partially built session.
"""

from pathlib import Path
from typing import Callable, List, Optional, Union

from lxml import etree

from piwis_zdc.model.binding import element_path
from piwis_zdc.model.session import ZdcSession, parse_session_element
from piwis_zdc.shared import (
    AmbiguousSessionError,
    DocumentSyntaxError,
    LoaderConfig,
    SessionNotFoundError,
    SessionPathError,
    get_logger,
)

PathLike = Union[str, Path]
MatchObserver = Callable[[Path], None]


def _create_xml_parser(
    config: LoaderConfig, encoding: Optional[str] = None, recover: bool = False
) -> etree.XMLParser:
    return etree.XMLParser(
        encoding=encoding,
        recover=recover,
        resolve_entities=config.resolve_entities,
        no_network=True,
        huge_tree=config.huge_tree,
        remove_comments=True,
        remove_pis=True,
    )


def _open_element_path(
    data: bytes, line: Optional[int], config: LoaderConfig, encoding: Optional[str]
) -> Optional[str]:
    """Path of the last element starting at or before ``line`` in a recovered parse."""
    if line is None:
        return None
    try:
        root = etree.fromstring(data, _create_xml_parser(config, encoding, recover=True))
    except etree.XMLSyntaxError:
        return None
    if root is None:
        return None

    last = None
    for element in root.iter(etree.Element):
        if element.sourceline is not None and element.sourceline <= line:
            last = element
    return element_path(last) if last is not None else None


def _syntax_error(
    error: etree.XMLSyntaxError,
    source: Optional[str],
    data: bytes,
    config: LoaderConfig,
    encoding: Optional[str] = None,
) -> DocumentSyntaxError:
    line, column = error.position if error.position else (None, None)
    path = _open_element_path(data, line, config, encoding)
    return DocumentSyntaxError(error.msg or str(error), source, line, column, path)


def find_session_files(directory: PathLike, config: Optional[LoaderConfig] = None) -> List[Path]:
    """List the exports in ``directory``, sorted by name.

    Only the directory's immediate entries are considered: regular files whose
    name contains the configured marker and whose suffix is the configured
    extension.

    Raises:
        SessionPathError: If ``directory`` does not exist or is not a directory
    """
    config = config or LoaderConfig()
    path = Path(directory)
    if not path.is_dir():
        raise SessionPathError("Provided path is not a directory.", str(path))

    return sorted(
        entry for entry in path.iterdir()
        if entry.is_file()
        and config.marker in entry.name
        and entry.suffix == config.extension
    )


def find_session_file(directory: PathLike, config: Optional[LoaderConfig] = None) -> Path:
    """Return the single export in ``directory``.

    Raises:
        SessionPathError: If ``directory`` is not a directory
        SessionNotFoundError: If no file matches
        AmbiguousSessionError: If several files match and the configuration
            does not allow picking the first one
    """
    config = config or LoaderConfig()
    logger = get_logger(__name__, None, "find_session_file")

    matches = find_session_files(directory, config)
    if not matches:
        raise SessionNotFoundError(
            f"Could not find {config.marker} ZDC files in directory.", str(directory)
        )

    if len(matches) > 1:
        names = [match.name for match in matches]
        if not config.allow_multiple_matches:
            raise AmbiguousSessionError(
                f"Found {len(matches)} {config.marker} ZDC files in directory: "
                f"{', '.join(names)}",
                str(directory),
                names,
            )
        logger.warning(
            "Several session exports found, using the first",
            extra={"directory": str(directory), "candidates": names},
        )

    return matches[0]


def parse_session_string(
    data: Union[str, bytes],
    config: Optional[LoaderConfig] = None,
    source: Optional[str] = None,
) -> ZdcSession:
    """Bind export content held in memory.

    Args:
        data: XML document as text or bytes
        config: Loader configuration (defaults apply when omitted)
        source: Name used in error messages and logs

    Raises:
        DocumentSyntaxError: If ``data`` is not well-formed XML
        SchemaError: If the document does not match the session schema
    """
    config = config or LoaderConfig()
    encoding = None
    if isinstance(data, str):
        # lxml refuses str input carrying an encoding declaration, and the
        # declared encoding no longer describes the re-encoded bytes
        data = data.encode("utf-8")
        encoding = "utf-8"

    try:
        root = etree.fromstring(data, _create_xml_parser(config, encoding))
    except etree.XMLSyntaxError as e:
        raise _syntax_error(e, source, data, config, encoding) from e

    return parse_session_element(root, config.max_nesting_depth, source)


def parse_session_file(
    file_path: PathLike,
    config: Optional[LoaderConfig] = None,
) -> ZdcSession:
    """Bind one export file.

    Raises:
        DocumentSyntaxError: If the file is not well-formed XML
        SchemaError: If the document does not match the session schema
        OSError: If the file cannot be read
    """
    config = config or LoaderConfig()
    path = Path(file_path)
    logger = get_logger(__name__, path.name, "parse_session_file")

    with logger.timed("Session export bound", file=str(path)) as fields:
        try:
            tree = etree.parse(str(path), _create_xml_parser(config))
        except etree.XMLSyntaxError as e:
            raise _syntax_error(e, str(path), path.read_bytes(), config) from e

        session = parse_session_element(
            tree.getroot(), config.max_nesting_depth, str(path)
        )
        fields["sections"] = len(session.sections)

    return session


def load_session(
    directory: PathLike,
    config: Optional[LoaderConfig] = None,
    on_match: Optional[MatchObserver] = None,
) -> ZdcSession:
    """Find the export in a session directory and bind it.

    Args:
        directory: Session directory written by the tester
        config: Loader configuration (defaults apply when omitted)
        on_match: Optional observer called with the chosen export path
            before it is parsed

    Examples:
        >>> session = load_session("sessions/2024-08-04")  # doctest: +SKIP
        >>> session.section_by_title("Gateway (A7.1)").title  # doctest: +SKIP
        'Gateway (A7.1)'
    """
    config = config or LoaderConfig()
    file_path = find_session_file(directory, config)

    logger = get_logger(__name__, file_path.name, "load_session")
    logger.info(
        "Found session export",
        extra={"directory": str(directory), "file": file_path.name},
    )
    if on_match is not None:
        on_match(file_path)

    return parse_session_file(file_path, config)
