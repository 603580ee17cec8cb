"""Desired-versus-persisted diffing for dashboard child relations.

Each relation is diffed on a natural key: ``(dashboardid, userid)`` for user
grants, ``(dashboardid, usrgrpid)`` for group grants and
``(dashboardid, ordinal)`` for widgets, where the ordinal is the widget's
position once a dashboard's widgets are sorted by row, then column.
"""

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, Mapping, Sequence

Row = dict[str, Any]

WIDGET_FIELDS = ("type", "name", "row", "col", "height", "width")
GRANT_FIELDS = ("permission",)


@dataclass
class ChangeSet:
    deletes: list[int] = field(default_factory=list)
    patches: list[Row] = field(default_factory=list)
    inserts: list[Row] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.deletes or self.patches or self.inserts)

    def counts(self) -> dict[str, int]:
        return {
            "deleted": len(self.deletes),
            "patched": len(self.patches),
            "inserted": len(self.inserts),
        }


def diff_rows(
    persisted: Iterable[tuple[Hashable, Row]],
    desired: Mapping[Hashable, Row],
    fields: Sequence[str],
) -> ChangeSet:
    """Classify keyed persisted rows and desired entries exactly once each.

    Persisted rows whose key is desired become patches carrying only the
    differing fields (or nothing when equal); the rest are deleted. Desired
    entries no persisted row claimed become inserts.
    """
    changes = ChangeSet()
    unclaimed = dict(desired)

    for key, db_row in persisted:
        wanted = unclaimed.pop(key, None)
        if wanted is None:
            changes.deletes.append(db_row["id"])
            continue

        values = {name: wanted[name] for name in fields if wanted[name] != db_row[name]}
        if values:
            changes.patches.append({"id": db_row["id"], **values})

    changes.inserts.extend(unclaimed.values())
    return changes


def diff_grants(
    grants_by_dashboard: Mapping[int, Sequence[Row]],
    persisted: Iterable[Row],
    target: str,
) -> ChangeSet:
    """Diff sharing grants keyed on ``(dashboardid, <target>)``."""
    desired = {}
    for dashboardid, grants in grants_by_dashboard.items():
        for grant in grants:
            desired[(dashboardid, grant[target])] = {
                "dashboardid": dashboardid,
                target: grant[target],
                "permission": grant["permission"],
            }

    keyed = (((row["dashboardid"], row[target]), row) for row in persisted)
    return diff_rows(keyed, desired, GRANT_FIELDS)


def _by_position(row: Row) -> tuple[int, int]:
    return row["row"], row["col"]


def with_ordinals(rows: Iterable[Row]) -> list[tuple[tuple[int, int], Row]]:
    """Pair every widget with ``(dashboardid, ordinal)`` in row, col order."""
    keyed = []
    next_ordinal: dict[int, int] = {}
    for row in sorted(rows, key=lambda r: (r["dashboardid"], r["row"], r["col"])):
        ordinal = next_ordinal.get(row["dashboardid"], 0)
        next_ordinal[row["dashboardid"]] = ordinal + 1
        keyed.append(((row["dashboardid"], ordinal), row))
    return keyed


def diff_widgets(
    widgets_by_dashboard: Mapping[int, Sequence[Row]],
    persisted: Iterable[Row],
) -> ChangeSet:
    desired = {}
    for dashboardid, widgets in widgets_by_dashboard.items():
        for ordinal, widget in enumerate(sorted(widgets, key=_by_position)):
            desired[(dashboardid, ordinal)] = {
                "dashboardid": dashboardid,
                **{name: widget[name] for name in WIDGET_FIELDS},
            }

    return diff_rows(with_ordinals(persisted), desired, WIDGET_FIELDS)
