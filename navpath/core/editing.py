import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .math import Point
from .path import PathState
from .settings import EditorSettings
from .storage import validate_record

if TYPE_CHECKING:
    from .transform import CoordinateTransform

logger = logging.getLogger(__name__)


class EditMode(Enum):
    IDLE = "Idle"
    PLACING = "Placing"
    DRAGGING = "Dragging"


@dataclass(frozen=True)
class Modifiers:
    """Modifier keys held while an input event happens."""
    place: bool = False
    undo: bool = False


class KeyState:
    """
    Names of the keys currently held down. Owned by whoever receives the
    key events and queried to build the Modifiers of each transition.
    """

    def __init__(self):
        self._pressed: set[str] = set()

    def press(self, key: str) -> None:
        self._pressed.add(key)

    def release(self, key: str) -> None:
        self._pressed.discard(key)

    def is_down(self, key: str) -> bool:
        return key in self._pressed

    def clear(self) -> None:
        self._pressed.clear()

    def modifiers(self, settings: EditorSettings) -> Modifiers:
        return Modifiers(
            place=self.is_down(settings.place_key),
            undo=self.is_down(settings.undo_modifier),
        )


@dataclass(frozen=True)
class Snapshot:
    """Path captured in world units before the display mapping changes."""
    token: int
    record: dict


_tokens = itertools.count(1)


class PathEditor:
    """
    Pointer/key driven editing of a single PathState.

      - place modifier held + pointer down: append a point
      - pointer down on a point: drag it until pointer up/leave
      - undo modifier held + undo command: drop the last point
      - loop command: close / reopen the path

    Every change raises the `dirty` flag; the render loop clears it.
    Changes of the path itself also bump `revision`.
    """

    def __init__(self, path: PathState | None = None, settings: EditorSettings | None = None):
        self._path = path if path is not None else PathState()
        self._settings = settings or EditorSettings()
        self._drag_index: int | None = None
        self._pointer_down = False
        self._cursor: Point | None = None
        self._dirty = True
        self._revision = 0
        self._pending: Snapshot | None = None
        self._deferred_load: dict | None = None

    # ---- accessors ----------------------------------------------------------
    @property
    def path(self) -> PathState:
        return self._path

    @property
    def settings(self) -> EditorSettings:
        return self._settings

    @property
    def cursor(self) -> Point | None:
        return self._cursor

    @property
    def drag_index(self) -> int | None:
        return self._drag_index

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def revision(self) -> int:
        """Counter bumped on every change of the path itself (not the cursor)."""
        return self._revision

    @property
    def has_pending_snapshot(self) -> bool:
        return self._pending is not None

    def mode(self, modifiers: Modifiers) -> EditMode:
        if self._drag_index is not None:
            return EditMode.DRAGGING
        if modifiers.place and not self._path.loop_finished:
            return EditMode.PLACING
        return EditMode.IDLE

    def mark_dirty(self) -> None:
        self._dirty = True

    def clear_dirty(self) -> bool:
        was = self._dirty
        self._dirty = False
        return was

    def _changed(self) -> None:
        self._revision += 1
        self._dirty = True

    # ---- pointer events -----------------------------------------------------
    def pointer_down(self, pos: Point, modifiers: Modifiers) -> bool:
        placing = modifiers.place and not self._path.loop_finished
        if placing and not self._pointer_down:
            self._pointer_down = True
            self._path.append_point(pos)
            self._changed()
            return True

        self._pointer_down = True
        idx = self._path.index_at(pos, self._settings.snap_radius)
        if idx is not None:
            self._drag_index = idx
            self._dirty = True
        return False

    def pointer_move(self, pos: Point, modifiers: Modifiers) -> bool:
        self._cursor = (float(pos[0]), float(pos[1]))
        self._dirty = True
        if self._drag_index is None or modifiers.place:
            return False
        if not self._path.move_point(self._drag_index, pos):
            return False
        self._changed()
        return True

    def pointer_up(self) -> None:
        self._pointer_down = False
        if self._drag_index is not None:
            self._drag_index = None
            self._dirty = True

    def pointer_leave(self) -> None:
        self.pointer_up()
        self._cursor = None
        self._dirty = True

    # ---- commands -----------------------------------------------------------
    def undo(self, modifiers: Modifiers) -> bool:
        if not modifiers.undo:
            return False
        if self._drag_index is not None and self._drag_index >= len(self._path) - 1:
            self._drag_index = None
        if not self._path.pop_last():
            logger.debug("Nothing to undo")
            return False
        self._changed()
        return True

    def toggle_loop(self) -> bool:
        if not self._path.toggle_loop():
            return False
        self._changed()
        return True

    def clear(self) -> None:
        self._path.clear()
        self._drag_index = None
        self._changed()

    # ---- persistence --------------------------------------------------------
    def save(self, transform: "CoordinateTransform") -> dict:
        return self._path.copy().to_dict(transform)

    def load(self, record: dict, transform: "CoordinateTransform") -> bool:
        """
        Replace the path with a persisted record. While a snapshot is
        outstanding the record is kept and applied by `restore`. Malformed
        records raise ValueError before anything is kept.
        """
        validate_record(record)
        if self._pending is not None:
            logger.debug("Deferring path load until snapshot %d is restored", self._pending.token)
            self._deferred_load = dict(record)
            return False
        self._replace(PathState.from_dict(record, transform))
        return True

    def snapshot(self, transform: "CoordinateTransform") -> Snapshot:
        """First half of the resize protocol: capture the path in world units."""
        snap = Snapshot(token=next(_tokens), record=self.save(transform))
        self._pending = snap
        return snap

    def restore(self, snapshot: Snapshot, transform: "CoordinateTransform") -> None:
        """Second half: reproject the captured (or deferred) path with the new mapping."""
        if self._pending is None or snapshot.token != self._pending.token:
            raise ValueError(f"Snapshot {snapshot.token} is not the outstanding snapshot")
        self._pending = None
        record = self._deferred_load if self._deferred_load is not None else snapshot.record
        self._deferred_load = None
        self._replace(PathState.from_dict(record, transform))

    def _replace(self, path: PathState) -> None:
        self._path = path
        self._drag_index = None
        self._changed()
