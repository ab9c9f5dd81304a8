"""Capabilities a plugin can declare to edit a song."""

from __future__ import annotations

from enum import Enum


class SongAccess(str, Enum):
    CREATE_TRACK = "createTrack"
    REMOVE_TRACK = "removeTrack"
    CREATE_CLIP = "createClip"
    REMOVE_CLIP = "removeClip"
    CREATE_NOTE = "createNote"
    EDIT_TEMPO = "editTempo"
    EDIT_TIME_SIGNATURE = "editTimeSignature"
    EDIT_AUTOMATION = "editAutomation"


# Structural edits that require a plugin to be enabled by hand.
MANUAL_ENABLE_ACCESS: frozenset[SongAccess] = frozenset({SongAccess.CREATE_TRACK, SongAccess.REMOVE_TRACK})
