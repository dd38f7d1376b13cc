"""Compare the values of two sessions.

Values are matched by section title, measurement breadcrumb and label. The
caption never takes part in matching: it is a human text that different
labels may share. When one measurement holds the same label more than once,
the occurrences are paired up in document order.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, List, Optional

import pandas as pd

from piwis_zdc.api.query import iter_values
from piwis_zdc.model.session import ZdcSession
from piwis_zdc.tools.dump import SEPARATOR, UNDEFINED

KEY_COLUMNS = ["section", "measurement", "label", "occurrence"]
FRAME_COLUMNS = ["section", "measurement", "label", "caption", "unit", "value"]


class DiffKind(Enum):
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


@dataclass(frozen=True)
class DiffEntry:
    """One value present on only one side, or different between both."""

    kind: DiffKind
    section: str
    measurement: str
    label: str
    caption: str
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    old_unit: Optional[str] = None
    new_unit: Optional[str] = None

    @property
    def path(self) -> str:
        parts = [self.section]
        if self.measurement:
            parts.append(self.measurement)
        parts.append(self.caption)
        return SEPARATOR.join(parts)


def session_frame(session: ZdcSession) -> pd.DataFrame:
    """Flatten every value of ``session`` into one row.

    Columns: ``section``, ``measurement`` (nested titles joined with
    `` >> ``), ``label``, ``caption``, ``unit``, ``value`` and ``occurrence``,
    the index of the row among rows sharing section, measurement and label.
    """
    rows = [
        {
            "section": breadcrumb[0],
            "measurement": SEPARATOR.join(breadcrumb[1:]),
            "label": value.label,
            "caption": value.caption,
            "unit": value.unit,
            "value": value.raw_value,
        }
        for breadcrumb, value in iter_values(session)
    ]
    frame = pd.DataFrame(rows, columns=FRAME_COLUMNS, dtype=object)
    frame["occurrence"] = (
        frame.groupby(KEY_COLUMNS[:-1], sort=False).cumcount().astype("int64")
    )
    return frame


def _clean(value: Any) -> Optional[str]:
    return None if pd.isna(value) else value


def diff_sessions(left: ZdcSession, right: ZdcSession) -> List[DiffEntry]:
    """Return the value differences going from ``left`` to ``right``.

    Entries follow ``left``'s document order, with values only present in
    ``right`` at the end.
    """
    old = session_frame(left)
    new = session_frame(right)
    old["position"] = range(len(old))
    new["position"] = range(len(new))

    merged = old.merge(
        new,
        on=KEY_COLUMNS,
        how="outer",
        suffixes=("_old", "_new"),
        indicator=True,
    )
    # outer joins sort their keys; restore document order
    merged = merged.sort_values(
        ["position_old", "position_new"], na_position="last", kind="stable"
    )

    entries = []
    for row in merged.to_dict("records"):
        old_value, new_value = _clean(row["value_old"]), _clean(row["value_new"])
        old_unit, new_unit = _clean(row["unit_old"]), _clean(row["unit_new"])
        side = row["_merge"]

        if side == "left_only":
            kind = DiffKind.REMOVED
        elif side == "right_only":
            kind = DiffKind.ADDED
        elif old_value != new_value or old_unit != new_unit:
            kind = DiffKind.CHANGED
        else:
            continue

        entries.append(DiffEntry(
            kind=kind,
            section=row["section"],
            measurement=row["measurement"],
            label=row["label"],
            caption=_clean(row["caption_new"]) or _clean(row["caption_old"]) or "",
            old_value=old_value,
            new_value=new_value,
            old_unit=old_unit,
            new_unit=new_unit,
        ))
    return entries


def diff_frame(entries: List[DiffEntry]) -> pd.DataFrame:
    """Tabulate diff entries, e.g. for CSV or JSON export."""
    records = []
    for entry in entries:
        record = asdict(entry)
        record["kind"] = entry.kind.value
        records.append(record)
    columns = list(DiffEntry.__dataclass_fields__)
    return pd.DataFrame(records, columns=columns)


def _show(value: Optional[str], unit: Optional[str]) -> str:
    if value is None:
        return UNDEFINED
    return f"{value} {unit}" if unit else value


def format_diff(entries: List[DiffEntry]) -> List[str]:
    """Render entries as ``+``, ``-`` and ``~`` prefixed lines."""
    lines = []
    for entry in entries:
        where = f"{entry.path} [{entry.label}]"
        if entry.kind is DiffKind.ADDED:
            lines.append(f"+ {where}: {_show(entry.new_value, entry.new_unit)}")
        elif entry.kind is DiffKind.REMOVED:
            lines.append(f"- {where}: {_show(entry.old_value, entry.old_unit)}")
        else:
            lines.append(
                f"~ {where}: {_show(entry.old_value, entry.old_unit)} -> "
                f"{_show(entry.new_value, entry.new_unit)}"
            )
    return lines
