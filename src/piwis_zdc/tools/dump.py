"""Print every value of a session as a breadcrumb line.

Example line::

    Gateway (A7.1) >> Control unit, coding >> Battery change: Scanner code: 205 BA24H9F0EGE
"""

import sys
from typing import Iterator, Optional, TextIO

from piwis_zdc.api.query import iter_values
from piwis_zdc.model.session import ZdcSession

SEPARATOR = " >> "
UNDEFINED = "undefined"


def dump_lines(session: ZdcSession) -> Iterator[str]:
    for breadcrumb, value in iter_values(session):
        path = SEPARATOR.join(breadcrumb + (value.caption,))
        raw = value.raw_value
        yield f"{path}: {raw if raw is not None else UNDEFINED}"


def dump(session: ZdcSession, stream: Optional[TextIO] = None) -> int:
    """Write dump_lines() to ``stream`` (stdout by default); return the line count."""
    stream = stream or sys.stdout
    count = 0
    for line in dump_lines(session):
        print(line, file=stream)
        count += 1
    return count
