"""Import merger exports."""

from songflow.importer.merger import LEAD_IN_BPM, import_decoded_song, import_midi_file, scale_int_by
from songflow.importer.mido_decoder import decode_midi_file
from songflow.importer.schemas import (
    CC_PAN,
    CC_VOLUME,
    DecodedControlChange,
    DecodedInstrument,
    DecodedNote,
    DecodedSong,
    DecodedTempo,
    DecodedTimeSignature,
    DecodedTrack,
)

__all__ = [
    "CC_PAN",
    "CC_VOLUME",
    "DecodedControlChange",
    "DecodedInstrument",
    "DecodedNote",
    "DecodedSong",
    "DecodedTempo",
    "DecodedTimeSignature",
    "DecodedTrack",
    "LEAD_IN_BPM",
    "decode_midi_file",
    "import_decoded_song",
    "import_midi_file",
    "scale_int_by",
]
